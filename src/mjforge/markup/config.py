"""
Configuration for the markup layer.

Dialect bindings for the authoring markup and the compiled output annotations.
"""

MARKUP_CONFIG = {
    # Attribute holding space-separated marker tokens on source elements
    "marker_attribute": "mj-class",
    "marker_prefix": "editable-",
    # Synthetic wrapper so body fragments and full documents parse alike
    "wrapper_tag": "mjforge-root",
    "head_tag": "mj-head",
    "prelude_tag": "mj-attributes",
    "declaration_tag": "mj-class",
    "image_tag": "mj-image",
}

# Source tag -> kind, used by the Default Tagger and the projector classifier
ELIGIBLE_KINDS = {
    "mj-text": "text",
    "mj-button": "button",
    "mj-image": "image",
}

DEFAULT_ELEMENT_KIND = "text"

# Attributes written onto compiled elements for the interactive layer
ANNOTATION_ATTRIBUTES = {
    "enabled": "data-editable",
    "logical_id": "data-editable-id",
    "index": "data-editable-index",
    "kind": "data-editable-type",
}
