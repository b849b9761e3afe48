"""Blood donation coordination app.

Models, serializers, services and API views for hospitals, donors,
urgency requests, appointments and inventory.
"""
