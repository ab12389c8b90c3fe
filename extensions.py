"""
Flask extensions initialization.
Extensions are initialized here and then initialized with the app in app.py.
"""

from services.room_registry import RoomRegistryClient

# Room registry client (configured from app config in init_app)
room_registry = RoomRegistryClient()
