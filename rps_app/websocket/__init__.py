"""
WebSocket Package

Contains the Flask-SocketIO event handlers.
"""
