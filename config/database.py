import logging
from typing import List

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient

logger = logging.getLogger("chat")


class ChatDatabase:
    def __init__(self, client: AsyncIOMotorClient, database_name: str = "chatdb"):
        self.client = client
        self.db = client[database_name]
        self.users = self.db['users']
        self.messages = self.db['messages']

    @classmethod
    async def connect(cls, mongo_uri: str, database_name: str = "chatdb") -> "ChatDatabase":
        # tz_aware so sent_at comes back as UTC rather than naive
        client = AsyncIOMotorClient(mongo_uri, tz_aware=True)
        try:
            await client.admin.command('ping')
        except Exception:
            client.close()
            raise
        logger.info("Connected to MongoDB database %s", database_name)
        return cls(client, database_name)

    def close(self):
        self.client.close()

    async def count_users(self, username: str) -> int:
        return await self.users.count_documents({'username': username})

    async def insert_message(self, message: dict):
        await self.messages.insert_one(dict(message))

    async def find_messages(self) -> List[dict]:
        cursor = self.messages.find({}).sort('sent_at', 1)
        return await cursor.to_list(length=None)


def get_database(request: Request) -> ChatDatabase:
    return request.app.state.database
