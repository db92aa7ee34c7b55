"""매장 서비스 — 매장 및 스킬 요건 비즈니스 로직.

Store Service — Business logic for store CRUD and per-day-category skill
requirements (required headcount per skill type and level).
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from shiftboard.models.store import Store, StoreSkillRequirement
from shiftboard.repositories.store_repository import store_repository
from shiftboard.schemas.store import SkillRequirement, StoreCreate, StoreResponse, StoreUpdate
from shiftboard.utils.exceptions import NotFoundError

# 신규 매장 기본 요건 — Default requirement set for a new store
DEFAULT_SKILL_REQUIREMENTS: tuple[dict[str, Any], ...] = (
    {"day": "weekday", "kitchen": {"A": 1, "B": 1, "C": 0}, "hall": {"A": 1, "B": 1, "C": 0}, "sales": {"A": 1, "B": 0, "C": 0}},
    {"day": "saturday", "kitchen": {"A": 1, "B": 2, "C": 0}, "hall": {"A": 1, "B": 2, "C": 0}, "sales": {"A": 2, "B": 0, "C": 0}},
    {"day": "sunday", "kitchen": {"A": 1, "B": 2, "C": 0}, "hall": {"A": 1, "B": 2, "C": 0}, "sales": {"A": 2, "B": 0, "C": 0}},
    {"day": "holiday", "kitchen": {"A": 2, "B": 2, "C": 0}, "hall": {"A": 2, "B": 2, "C": 0}, "sales": {"A": 2, "B": 1, "C": 0}},
)


def requirement_to_dict(requirement: StoreSkillRequirement) -> dict[str, Any]:
    return {
        "day": requirement.day,
        "kitchen": dict(requirement.kitchen),
        "hall": dict(requirement.hall),
        "sales": dict(requirement.sales),
    }


def _region_of(address: str) -> str | None:
    # "京都市中京区..." → "中京区"
    parts: list[str] = address.split("市", 1)
    if len(parts) < 2 or "区" not in parts[1]:
        return None
    return parts[1].split("区")[0] + "区"


class StoreService:
    """매장 관련 비즈니스 로직을 처리하는 서비스.

    Service handling store and skill requirement business logic.
    """

    def to_response(self, store: Store) -> StoreResponse:
        return StoreResponse(
            id=str(store.id),
            name=store.name,
            address=store.address,
            phone=store.phone,
            skill_requirements=[SkillRequirement(**requirement_to_dict(r)) for r in store.skill_requirements],
            created_at=store.created_at,
        )

    async def list_stores(self, db: AsyncSession) -> Sequence[Store]:
        return await store_repository.get_ordered(db)

    async def get_store(self, db: AsyncSession, store_id: UUID) -> Store:
        """매장 단건을 조회합니다.

        Raises:
            NotFoundError: 매장이 없을 때 (Store not found)
        """
        store: Store | None = await store_repository.get_by_id(db, store_id)
        if store is None:
            raise NotFoundError("매장을 찾을 수 없습니다 (Store not found)")
        return store

    async def create_store(self, db: AsyncSession, data: StoreCreate) -> Store:
        """매장을 생성합니다.

        Create a store. When no requirements are given the default set
        (weekday/saturday/sunday/holiday) is attached.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 매장 생성 데이터 (Store creation data)

        Returns:
            Store: 생성된 매장 (Created store)
        """
        if data.skill_requirements is None:
            requirements: list[dict[str, Any]] = [dict(r) for r in DEFAULT_SKILL_REQUIREMENTS]
        else:
            requirements = [r.model_dump() for r in data.skill_requirements]

        store: Store = Store(
            name=data.name,
            address=data.address,
            phone=data.phone,
            skill_requirements=[StoreSkillRequirement(**r) for r in _dedupe_by_day(requirements)],
        )
        db.add(store)
        await db.flush()
        await db.refresh(store)
        return store

    async def create_new_store(self, db: AsyncSession, name: str, address: str, phone: str) -> UUID:
        """기본 요건으로 신규 매장을 생성하고 ID를 반환합니다 (Create with default requirements, return the id)."""
        store: Store = await self.create_store(db, StoreCreate(name=name, address=address, phone=phone))
        return store.id

    async def update_store(self, db: AsyncSession, store_id: UUID, data: StoreUpdate) -> Store:
        """매장 정보를 부분 수정합니다.

        Partially update a store. A given requirement list replaces the
        existing one entirely.

        Raises:
            NotFoundError: 매장이 없을 때 (Store not found)
        """
        store: Store = await self.get_store(db, store_id)
        update_data: dict[str, Any] = data.model_dump(exclude_unset=True)

        update_data.pop("skill_requirements", None)
        for field, value in update_data.items():
            setattr(store, field, value)
        if data.skill_requirements is not None:
            # 요건은 미입력 등급까지 전체 덤프 — Requirements are dumped whole, unset levels included
            requirements: list[dict[str, Any]] = [r.model_dump() for r in data.skill_requirements]
            # 기존 요건 삭제를 먼저 flush — Old rows must be gone before new ones hit the (store, day) constraint
            store.skill_requirements.clear()
            await db.flush()
            store.skill_requirements.extend(StoreSkillRequirement(**r) for r in _dedupe_by_day(requirements))

        await db.flush()
        await db.refresh(store)
        return store

    async def delete_store(self, db: AsyncSession, store_id: UUID) -> None:
        store: Store = await self.get_store(db, store_id)
        await db.delete(store)
        await db.flush()

    async def update_skill_requirement(
        self,
        db: AsyncSession,
        store_id: UUID,
        requirement: SkillRequirement,
    ) -> Store:
        """요일 구분 요건을 교체하거나 추가합니다.

        Replace the requirement for requirement.day, or append it if the store
        has none for that day-category.

        Raises:
            NotFoundError: 매장이 없을 때 (Store not found)
        """
        store: Store = await self.get_store(db, store_id)
        existing: StoreSkillRequirement | None = await store_repository.get_requirement(db, store_id, requirement.day)
        levels: dict[str, Any] = requirement.model_dump(exclude={"day"})

        if existing is not None:
            for skill, counts in levels.items():
                setattr(existing, skill, counts)
        else:
            store.skill_requirements.append(StoreSkillRequirement(day=requirement.day, **levels))

        await db.flush()
        await db.refresh(store)
        return store

    async def remove_skill_requirement(self, db: AsyncSession, store_id: UUID, day: str) -> Store:
        """요일 구분 요건을 삭제합니다. 없으면 아무 것도 하지 않습니다.

        Remove the requirement for a day-category; a no-op if absent.

        Raises:
            NotFoundError: 매장이 없을 때 (Store not found)
        """
        store: Store = await self.get_store(db, store_id)
        existing: StoreSkillRequirement | None = await store_repository.get_requirement(db, store_id, day)
        if existing is None:
            return store

        store.skill_requirements.remove(existing)
        await db.flush()
        await db.refresh(store)
        return store

    async def get_stores_by_skill_requirement(
        self,
        db: AsyncSession,
        day: str,
        skill: str,
        level: str,
        min_count: int = 1,
    ) -> list[Store]:
        """특정 요건을 가진 매장을 검색합니다.

        Find stores whose requirement for `day` needs at least `min_count`
        staff of `level` in `skill`. Stores with no requirement for that
        day-category are excluded.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            day: 요일 구분 (weekday | saturday | sunday | holiday)
            skill: 스킬 유형 (kitchen | hall | sales)
            level: 등급 (A | B | C)
            min_count: 최소 인원 (Minimum headcount, default 1)

        Returns:
            list[Store]: 해당 매장 목록 (Matching stores)
        """
        matches: list[Store] = []
        for store in await store_repository.get_ordered(db):
            requirement = next((r for r in store.skill_requirements if r.day == day), None)
            if requirement is None:
                continue
            if getattr(requirement, skill).get(level, 0) >= min_count:
                matches.append(store)
        return matches

    async def get_stores_summary(self, db: AsyncSession) -> dict:
        """전체 매장 요약을 계산합니다.

        Summarize all stores: count, stores per ward parsed from the address,
        and the total weekday headcount across every skill and level.

        Returns:
            dict: {total_stores, stores_by_region, total_weekday_staff_required}
        """
        stores: Sequence[Store] = await store_repository.get_ordered(db)

        stores_by_region: dict[str, int] = {}
        total_needed: int = 0
        for store in stores:
            region: str | None = _region_of(store.address or "")
            if region is not None:
                stores_by_region[region] = stores_by_region.get(region, 0) + 1

            weekday = next((r for r in store.skill_requirements if r.day == "weekday"), None)
            if weekday is not None:
                total_needed += sum(sum(getattr(weekday, skill).values()) for skill in ("kitchen", "hall", "sales"))

        return {
            "total_stores": len(stores),
            "stores_by_region": stores_by_region,
            "total_weekday_staff_required": total_needed,
        }


def _dedupe_by_day(requirements: list[dict[str, Any]]) -> list[dict[str, Any]]:
    # 같은 요일 구분이 여러 번 오면 마지막 것을 사용 — Last one wins per day-category
    by_day: dict[str, dict[str, Any]] = {}
    for requirement in requirements:
        by_day[requirement["day"]] = requirement
    return list(by_day.values())


# 싱글턴 인스턴스 — Singleton instance
store_service: StoreService = StoreService()
