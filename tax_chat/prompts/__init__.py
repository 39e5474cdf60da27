from .deadlines import FILING_DEADLINES, render_deadline_table  # noqa: F401
from .system import QUESTION_PROMPT, TAX_SYSTEM_PROMPT, USER_CONTEXT_PROMPT  # noqa: F401
