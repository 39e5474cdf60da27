AVAILABLE_ROUTES = [
    "GET /",
    "GET /health",
    "GET /api/health",
    "POST /api/chat/message",
]
