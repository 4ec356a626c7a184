"""HTTP and WebSocket surface of the Postboard application."""
