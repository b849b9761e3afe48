import json
from channels.generic.websocket import AsyncWebsocketConsumer

from donation.services.broadcast import URGENCY_GROUP


class UrgencyConsumer(AsyncWebsocketConsumer):
    """Read-only feed of hospital urgency changes for donor dashboards."""

    async def connect(self):
        await self.channel_layer.group_add(URGENCY_GROUP, self.channel_name)
        await self.accept()
        await self.send(json.dumps({"type": "welcome", "message": "connected"}))

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(URGENCY_GROUP, self.channel_name)

    async def urgency_changed(self, event):
        # event: {"type": "urgency.changed", "kind": "...", "ts": "...", "data": {...}}
        await self.send(json.dumps(event))
