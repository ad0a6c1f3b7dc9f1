"""
Completion API Data Models

Chat completion 요청/응답 스키마 (pydantic)
"""

from typing import List, Optional, Union
from pydantic import BaseModel, validator


class ChatMessage(BaseModel):
    """채팅 메시지"""
    role: str
    content: str

    @validator('role')
    def validate_role(cls, v):
        if v not in {'system', 'user', 'assistant'}:
            raise ValueError(f'Invalid role: {v}')
        return v


class ChatCompletionRequest(BaseModel):
    """Completion API 요청 본문"""
    model: str
    messages: List[ChatMessage]

    @validator('model')
    def validate_model(cls, v):
        if not v.strip():
            raise ValueError('Model must not be empty')
        return v

    @validator('messages')
    def validate_messages(cls, v):
        if not v:
            raise ValueError('At least one message is required')
        return v


class ChoiceMessage(BaseModel):
    """응답 choice 안의 메시지"""
    role: Optional[str] = None
    content: Optional[str] = None


class Choice(BaseModel):
    """응답 choice"""
    index: Optional[int] = None
    message: Optional[ChoiceMessage] = None
    finish_reason: Optional[str] = None


class ChatCompletionResponse(BaseModel):
    """choices[].message.content 형식의 응답"""
    id: Optional[str] = None
    model: Optional[str] = None
    choices: List[Choice] = []


class MessageCompletionResponse(BaseModel):
    """평평한 message 필드 형식의 응답"""
    message: Optional[Union[ChoiceMessage, str]] = None
