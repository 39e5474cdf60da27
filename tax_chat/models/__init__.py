"""Expose commonly used model classes at the package level.

Importing these classes here allows consumers to write concise imports like::

    from tax_chat.models import ChatRequest, ChatResult

These names refer to the underlying Pydantic models defined in their
respective modules.
"""

from .chat_request import ChatRequest, UserContext  # noqa: F401
from .chat_response import ChatMetadata, ChatResult  # noqa: F401
