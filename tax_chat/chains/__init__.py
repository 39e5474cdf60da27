from .tax_prompt_chain import TaxPromptChain  # noqa: F401
