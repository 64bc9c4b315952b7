# Middleware package init
"""
TripPlanner Backend: Middleware Package
=========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [Security Headers] → [GZip] → [CORS] → Route Handler

    1. Request ID: assigns the correlation ID that every later log line carries
    2. Logging: records method, path, status and duration with that ID
    3. Security Headers: stamps every response, error responses included
    4. GZip / CORS: provided by Starlette
"""
