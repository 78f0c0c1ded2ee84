"""Registries and stores shared by the test modules."""

from datetime import UTC, datetime

from typed_prefs import Field, Registry, StoreError, StoreRole
from typed_prefs.stores import InMemoryStore

FIXED_NOW = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


class Profile(Registry):
    firstname = Field("firstname", str, default="Shivam", store=StoreRole.SHARED)
    lastname = Field("lastname", str, default="Maggu", store=StoreRole.SHARED)
    grade = Field("grade", int | None, default=5)
    date_modified = Field("dateModified", datetime, default=FIXED_NOW)
    subjects = Field("subjects", list[str], default=["English", "Maths", "Science"])
    subject_teacher = Field(
        "subjectTeacher",
        dict[str, str],
        default={"English": "Mrs. Jaggi", "Maths": "Mr. Karim"},
    )
    is_active = Field("isActive", bool, default=True)
    profile_image = Field("profileImage", bytes, default=b"")
    cover_image = Field.optional("coverImage", bytes)


class FailingStore(InMemoryStore):
    """In-memory store whose deletes fail for the configured keys."""

    def __init__(self, namespace: str = "", fail_keys: tuple[str, ...] = ()) -> None:
        super().__init__(namespace)
        self.fail_keys = set(fail_keys)
        self.deleted: list[str] = []

    def delete(self, key: str) -> None:
        if key in self.fail_keys:
            raise StoreError("delete", f"medium unavailable for '{key}'")
        self.deleted.append(key)
        super().delete(key)
