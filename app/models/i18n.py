from typing import Any, Dict, List

from pydantic import BaseModel


class MessagesResponse(BaseModel):
    locale: str
    direction: str
    messages: Dict[str, Dict[str, Any]]


class LocalesResponse(BaseModel):
    locales: List[str]
    default_locale: str
    default_namespaces: List[str]


class LocaleLink(BaseModel):
    locale: str
    href: str


class PageResponse(BaseModel):
    locale: str
    direction: str
    pathname: str
    namespaces: List[str]
    title: str
    alternates: List[LocaleLink]
