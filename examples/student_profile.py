"""
typed_prefs: Student profile

A registry of typed preferences split across a private store and a
store shared with the rest of the app group.  Reads fall back to the
declared default; writing None to an optional field deletes it.
"""

from datetime import UTC, datetime

from typed_prefs import Field, Registry, StoreRole
from typed_prefs.config import RegistryConfig, StoreConfig, open_registry

# ─── Declared preferences ───


class StudentProfile(Registry):
    firstname = Field("firstname", str, default="Shivam", store=StoreRole.SHARED)
    lastname = Field("lastname", str, default="Maggu", store=StoreRole.SHARED)
    grade = Field("grade", int | None, default=5)
    date_modified = Field("dateModified", datetime, default_factory=lambda: datetime.now(UTC))
    subjects = Field("subjects", list[str], default=["English", "Maths", "Science"])
    subject_teacher = Field(
        "subjectTeacher",
        dict[str, str],
        default={"English": "Mrs. Jaggi", "Maths": "Mr. Karim", "Science": "Mrs. Rita"},
    )
    is_active = Field("isActive", bool, default=True)
    profile_image = Field("profileImage", bytes, default=b"")
    cover_image = Field.optional("coverImage", bytes)


def main():
    config = RegistryConfig(
        private=StoreConfig(type="sqlite", path="student.db"),
        shared=StoreConfig(type="sqlite", path="student.db", namespace="group.com.organisation.appname"),
        log_level="DEBUG",
    )

    with open_registry(StudentProfile, config, setup_logging=True) as prefs:
        print("=== Defaults ===\n")
        for name, value in prefs.snapshot().items():
            print(f"  {name:16} {value!r}")

        print("\n=== Writes ===\n")
        prefs.firstname = "Ravi"
        prefs.is_active = False
        prefs.cover_image = b"\x89PNG"
        prefs.grade = None  # optional with a default: removed, reads 5 again
        print(f"  firstname   {prefs.firstname!r}")
        print(f"  is_active   {prefs.is_active!r}")
        print(f"  cover_image {prefs.cover_image!r}")
        print(f"  grade       {prefs.grade!r}")

        print("\n=== Reset ===\n")
        prefs.clear_all()
        print(f"  firstname   {prefs.firstname!r}")
        print(f"  cover_image {prefs.cover_image!r}")


if __name__ == "__main__":
    main()
