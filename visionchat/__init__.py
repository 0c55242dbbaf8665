"""
VisionChat: accounts, an AI chat assistant and a crypto market dashboard API.

Application package root. A modular monolith using hexagonal
architecture (ports & adapters) with domain-driven design.

Bounded contexts:
    - auth: Email/password and Google accounts, sessions, verification.
    - chat: Stored conversations and streamed assistant replies.
    - market: Exchange data, technical analysis, global figures, news.

Layers:
    - domain: Pure business logic, entities, ports (ABCs), errors.
    - application: Use cases, DTOs, orchestration.
    - infrastructure: Adapters (DB, HTTP APIs, SMTP) implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
