"""Tax Chat Backend: Gemini relay for Colombian income tax questions."""
