"""Record id generation."""

import hashlib
import secrets
import time


def prompt_fingerprint(prompt: str) -> str:
    """Return a short content fingerprint of a prompt."""
    return hashlib.blake2b(prompt.encode("utf-8"), digest_size=8).hexdigest()


def generate_record_id(prompt: str) -> str:
    """Generate a unique record id for a prompt.

    The id combines a prompt fingerprint, the current time in milliseconds
    and a random nonce, so two stores of the same prompt in the same
    millisecond still get distinct ids.

    Args:
        prompt: The prompt being cached

    Returns:
        An id of the form ``{fingerprint}_{millis}_{nonce}``
    """
    millis = int(time.time() * 1000)
    return f"{prompt_fingerprint(prompt)}_{millis}_{secrets.token_hex(4)}"
