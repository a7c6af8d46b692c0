from datetime import datetime
from typing import Any, List, Optional

from pydantic import HttpUrl

from app.core.constants import BlockType, SocialPlatform
from app.schemas.base import CamelModel
from app.schemas.user import PublicDoctorOut


class PageAddressIn(CamelModel):
    name: str
    address: str
    is_default: bool = False


class PageCreate(CamelModel):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    layout: Optional[str] = None
    primary_color: Optional[str] = None
    avatar_url: Optional[str] = None
    address: Optional[str] = None
    addresses: List[PageAddressIn] = []
    slug: Optional[str] = None
    is_modal: bool = False


class PageUpdate(CamelModel):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    avatar_url: Optional[str] = None
    primary_color: Optional[str] = None
    layout: Optional[str] = None
    slug: Optional[str] = None


class BlockIn(CamelModel):
    type: BlockType
    content: Any = None
    order: int


class BlocksIn(CamelModel):
    blocks: List[BlockIn]


class SocialLinkIn(CamelModel):
    platform: SocialPlatform
    username: str
    url: HttpUrl


class SocialLinksIn(CamelModel):
    links: List[SocialLinkIn]


class AddressesIn(CamelModel):
    addresses: List[PageAddressIn]


class BlockOut(CamelModel):
    id: int
    type: str
    content: Any = None
    order: int


class SocialLinkOut(CamelModel):
    id: int
    platform: str
    username: str
    url: str


class PageAddressOut(CamelModel):
    id: int
    name: str
    address: str
    is_default: bool


class PageOut(CamelModel):
    id: int
    user_id: int
    title: str
    subtitle: Optional[str] = None
    slug: str
    layout: str
    primary_color: str
    avatar_url: Optional[str] = None
    address: Optional[str] = None
    is_modal: bool
    created_at: datetime
    updated_at: datetime
    blocks: List[BlockOut] = []
    social_links: List[SocialLinkOut] = []
    addresses: List[PageAddressOut] = []
    user: Optional[PublicDoctorOut] = None


class PageDeletedOut(CamelModel):
    message: str
    deleted_page: dict
