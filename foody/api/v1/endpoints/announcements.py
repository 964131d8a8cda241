"""
Announcement endpoints: public notice board plus staff management
"""
from fastapi import APIRouter, HTTPException, status
from foody.core.dependencies import DbDependency, StaffUser, PaginationDependency
from foody.database.models import Announcement
from foody.repositories import AnnouncementRepository
from foody.schemas.common import MessageResponse
from foody.schemas.engagement import (
    AnnouncementCreate, AnnouncementUpdate, AnnouncementEnvelope,
    AnnouncementListResponse, AnnouncementCollection,
)
from foody.core.i18n_logger import get_i18n_logger


logger = get_i18n_logger(__name__)

router = APIRouter(tags=["Announcements"])


async def _get_announcement(announcements: AnnouncementRepository, announcement_id: int) -> Announcement:
    announcement = await announcements.get(announcement_id)
    if announcement is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Announcement not found")
    return announcement


@router.get("", response_model=AnnouncementCollection)
async def active_announcements(db: DbDependency):
    """Active and unexpired announcements, pinned first (public)"""
    return AnnouncementCollection(announcements=await AnnouncementRepository(db).list_active())


@router.get("/all", response_model=AnnouncementListResponse)
async def all_announcements(staff: StaffUser, db: DbDependency, pagination: PaginationDependency):
    page, limit = pagination
    result = await AnnouncementRepository(db).list_all(page, limit)
    return AnnouncementListResponse(announcements=result.docs, pagination=result.pagination())


@router.post("", status_code=status.HTTP_201_CREATED, response_model=AnnouncementEnvelope)
async def create_announcement(data: AnnouncementCreate, staff: StaffUser, db: DbDependency):
    announcement = await AnnouncementRepository(db).create(**data.model_dump(), created_by_id=staff.id)
    await db.commit()

    logger.info("announcement.created", announcement_id=announcement.id, title=announcement.title)
    return AnnouncementEnvelope(announcement=announcement)


@router.put("/{announcement_id}", response_model=AnnouncementEnvelope)
async def update_announcement(
    announcement_id: int, data: AnnouncementUpdate, staff: StaffUser, db: DbDependency
):
    announcements = AnnouncementRepository(db)
    announcement = await _get_announcement(announcements, announcement_id)

    # expires_at may be explicitly cleared with null, so unset fields are skipped but nulls kept
    changes = data.model_dump(exclude_unset=True)
    changes = {
        field: value for field, value in changes.items()
        if value is not None or field == "expires_at"
    }
    announcement = await announcements.update(announcement, **changes)
    await db.commit()
    return AnnouncementEnvelope(announcement=announcement)


@router.delete("/{announcement_id}", response_model=MessageResponse)
async def delete_announcement(announcement_id: int, staff: StaffUser, db: DbDependency):
    announcements = AnnouncementRepository(db)
    announcement = await _get_announcement(announcements, announcement_id)

    await announcements.delete(announcement)
    await db.commit()

    logger.info("announcement.deleted", announcement_id=announcement_id, user_id=staff.id)
    return MessageResponse(message="Announcement deleted")
