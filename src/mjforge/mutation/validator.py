"""
ContentValidator: content policy checks for inline text updates.

Runs before the source is parsed, so a rejected value never touches the tree.
"""

from typing import Optional

from mjforge.exceptions import ContentValidationError
from mjforge.logging_config import logger
from .config import ContentPolicy


class ContentValidator:
    """
    Validate and sanitize new component content.

    Policy:
    - Trim surrounding whitespace (when enabled)
    - Reject empty content (unless allowed)
    - Reject content longer than max_length characters
    """

    def __init__(self, policy: Optional[ContentPolicy] = None):
        self.policy = policy or ContentPolicy.from_config()

    def validate(self, content, policy: Optional[ContentPolicy] = None) -> str:
        """
        Validate content against the policy.

        Args:
            content: Proposed new content
            policy: Optional per-call policy (overrides the validator's)

        Returns:
            Sanitized content to store

        Raises:
            ContentValidationError: If the content violates the policy
        """
        policy = policy or self.policy

        if not isinstance(content, str):
            raise ContentValidationError("Content must be a string")

        sanitized = content.strip() if policy.trim else content

        if not policy.allow_empty and len(sanitized) == 0:
            raise ContentValidationError("Content cannot be empty (minimum 1 character)", limit=1)

        if len(sanitized) > policy.max_length:
            logger.debug(f"Rejected content of {len(sanitized)} characters")
            raise ContentValidationError(
                f"Content too long ({len(sanitized)}/{policy.max_length} characters)",
                limit=policy.max_length,
            )

        return sanitized
