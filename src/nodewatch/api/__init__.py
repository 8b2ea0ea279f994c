"""HTTP/WebSocket host for the dashboard."""
