import logging
from typing import List

from fastapi import HTTPException
from sqlalchemy.orm import Session, selectinload

from app.api.models.page import Page, PageAddress, PageBlock, SocialLink
from app.api.models.user import User
from app.core.constants import PAGE_DELETE_CONFIRMATION
from app.core.utils import slugify, unique_slug
from app.schemas.page import AddressesIn, BlocksIn, PageAddressIn, PageCreate, PageUpdate, SocialLinksIn

logger = logging.getLogger("pages")


class PageService:

    @staticmethod
    def _query(db: Session):
        return db.query(Page).options(
            selectinload(Page.blocks),
            selectinload(Page.social_links),
            selectinload(Page.addresses),
        )

    @staticmethod
    def _slug_taken(db: Session, user_id: int, slug: str, exclude_id: int = None) -> bool:
        query = db.query(Page.id).filter(Page.user_id == user_id, Page.slug == slug)
        if exclude_id is not None:
            query = query.filter(Page.id != exclude_id)
        return query.first() is not None

    @staticmethod
    def list_for_user(db: Session, user: User) -> List[Page]:
        return (
            PageService._query(db)
            .filter(Page.user_id == user.id)
            .order_by(Page.created_at.desc(), Page.id.desc())
            .all()
        )

    @staticmethod
    def create(db: Session, user: User, data: PageCreate) -> Page:
        if not (data.title or "").strip():
            raise HTTPException(400, "Título é obrigatório")

        slug = unique_slug(
            slugify(data.slug or data.title),
            lambda s: PageService._slug_taken(db, user.id, s),
            fallback="pagina",
        )

        page = Page(
            user_id=user.id,
            title=data.title.strip(),
            subtitle=data.subtitle,
            slug=slug,
            layout=data.layout or "classic",
            primary_color=data.primary_color or "#0070df",
            avatar_url=data.avatar_url,
            address=data.address,
            is_modal=data.is_modal,
        )
        page.addresses = PageService._addresses(data.addresses)

        db.add(page)
        db.commit()
        db.refresh(page)
        logger.info("PAGE_CREATED: user_id=%s page_id=%s slug=%s", user.id, page.id, page.slug)
        return page

    @staticmethod
    def get_owned(db: Session, user: User, page_id: int) -> Page:
        page = PageService._query(db).filter(Page.id == page_id).first()
        if not page or page.user_id != user.id:
            raise HTTPException(404, "Página não encontrada")
        return page

    @staticmethod
    def update(db: Session, user: User, page: Page, data: PageUpdate) -> Page:
        values = data.model_dump(exclude_unset=True)

        if "slug" in values:
            slug = slugify(values.pop("slug"))
            if not slug:
                raise HTTPException(400, "Slug inválido")
            if PageService._slug_taken(db, user.id, slug, exclude_id=page.id):
                raise HTTPException(400, "Este slug já está em uso")
            page.slug = slug

        if "title" in values and not (values["title"] or "").strip():
            raise HTTPException(400, "Título é obrigatório")

        for field, value in values.items():
            if field in ("layout", "primary_color") and not value:
                continue
            setattr(page, field, value)

        db.commit()
        db.refresh(page)
        return page

    @staticmethod
    def delete(db: Session, page: Page, confirmation: str) -> dict:
        if confirmation != PAGE_DELETE_CONFIRMATION:
            raise HTTPException(
                400, f'Confirmação inválida. Digite "{PAGE_DELETE_CONFIRMATION}" para confirmar'
            )

        deleted = {"id": page.id, "title": page.title, "slug": page.slug}
        db.delete(page)
        db.commit()
        logger.info("PAGE_DELETED: page_id=%s", deleted["id"])
        return {"message": "Página excluída com sucesso", "deleted_page": deleted}

    @staticmethod
    def replace_blocks(db: Session, page: Page, data: BlocksIn) -> Page:
        page.blocks.clear()
        db.flush()
        for block in data.blocks:
            page.blocks.append(PageBlock(
                type=block.type.value,
                content=block.content,
                order=block.order,
            ))
        db.commit()
        db.refresh(page)
        return page

    @staticmethod
    def replace_social_links(db: Session, page: Page, data: SocialLinksIn) -> Page:
        page.social_links.clear()
        db.flush()
        for link in data.links:
            page.social_links.append(SocialLink(
                platform=link.platform.value,
                username=link.username,
                url=str(link.url),
            ))
        db.commit()
        db.refresh(page)
        return page

    @staticmethod
    def _addresses(addresses: List[PageAddressIn]) -> List[PageAddress]:
        """Valida a lista completa: nome e endereço obrigatórios e no máximo um padrão."""
        if any(not a.name.strip() or not a.address.strip() for a in addresses):
            raise HTTPException(400, "Nome e endereço são obrigatórios")
        if sum(1 for a in addresses if a.is_default) > 1:
            raise HTTPException(400, "Apenas um endereço pode ser o padrão")
        return [
            PageAddress(name=a.name.strip(), address=a.address.strip(), is_default=a.is_default)
            for a in addresses
        ]

    @staticmethod
    def replace_addresses(db: Session, page: Page, data: AddressesIn) -> Page:
        addresses = PageService._addresses(data.addresses)
        page.addresses.clear()
        db.flush()
        page.addresses.extend(addresses)
        db.commit()
        db.refresh(page)
        return page

    @staticmethod
    def add_address(db: Session, page: Page, data: PageAddressIn) -> PageAddress:
        (address,) = PageService._addresses([data])
        # novo padrão tira o padrão dos demais
        if address.is_default:
            for other in page.addresses:
                other.is_default = False
        page.addresses.append(address)
        db.commit()
        db.refresh(address)
        return address

    @staticmethod
    def public(db: Session, user_slug: str, slug: str) -> Page:
        user = db.query(User).filter(User.slug == user_slug).first()
        if not user:
            raise HTTPException(404, "Médico não encontrado")

        page = PageService._query(db).filter(Page.user_id == user.id, Page.slug == slug).first()
        if not page:
            raise HTTPException(404, "Página não encontrada")
        return page
