"""HTTP API. ``clubhub.api.app.create_app`` builds the FastAPI application."""
