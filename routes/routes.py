import logging
from datetime import datetime, timedelta, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from config.database import ChatDatabase, get_database
from models.models import User, NewMessage, ChatMessage, LoginResponse

logger = logging.getLogger("chat")

router = APIRouter()


def json_body(model):
    # Decode the body as JSON whatever Content-Type the client sent
    async def parse(request: Request):
        try:
            return model.model_validate_json(await request.body())
        except ValidationError as e:
            raise RequestValidationError(e.errors())
    return parse


def current_time() -> datetime:
    """Current UTC time rounded up to the millisecond MongoDB stores."""
    now = datetime.now(timezone.utc)
    remainder = now.microsecond % 1000
    if remainder:
        now += timedelta(microseconds=1000 - remainder)
    return now


@router.post("/login", response_model=LoginResponse)
async def login(user: User = Depends(json_body(User)), db: ChatDatabase = Depends(get_database)):
    try:
        count = await db.count_users(user.username)
    except PyMongoError as e:
        logger.error("User lookup failed for %s: %s", user.username, e)
        count = 0
    if count == 0:
        raise HTTPException(status_code=401, detail="User not found")

    logger.info("Login succeeded: %s", user.username)
    return LoginResponse()


@router.post("/send")
async def send_message(message: NewMessage = Depends(json_body(NewMessage)),
                       db: ChatDatabase = Depends(get_database)):
    message = dict(message)
    message['sent_at'] = current_time()
    try:
        await db.insert_message(message)
    except PyMongoError as e:
        logger.error("Failed to store message from %s: %s", message['username'], e)
        raise HTTPException(status_code=500, detail="Failed to send message")

    logger.info("Message stored from %s: %s", message['username'], message['message'])
    return Response(status_code=200)


@router.get("/messages", response_model=List[ChatMessage])
async def get_messages(db: ChatDatabase = Depends(get_database)):
    try:
        documents = await db.find_messages()
    except PyMongoError as e:
        logger.error("Message query failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to get messages")

    try:
        messages = [ChatMessage.model_validate(document) for document in documents]
    except ValidationError as e:
        logger.error("Stored message could not be decoded: %s", e)
        raise HTTPException(status_code=500, detail="Error decoding messages")

    logger.info("Returning %d messages", len(messages))
    return messages
