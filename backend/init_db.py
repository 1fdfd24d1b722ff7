"""
Store initialization script
Run this to create the data file (or table) and seed initial data
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from surveydesk.core.config import settings
from surveydesk.core.errors import ConflictError
from surveydesk.core.storage import DocumentStore, get_store
from surveydesk.schemas.survey import SurveyCreate
from surveydesk.schemas.user import UserCreate
from surveydesk.services.repository import SurveyRepository, UserRepository, ensure_admin


SAMPLE_SURVEY = {
    "title": "Checkout experience",
    "description": "Tell us how your shopping went.",
    "active": True,
    "questions": [
        {
            "id": "q1",
            "text": "How satisfied are you with your purchase?",
            "type": "radio",
            "required": True,
            "options": [
                {"value": "very_satisfied", "label": "Very satisfied"},
                {"value": "satisfied", "label": "Satisfied"},
                {"value": "unsatisfied", "label": "Unsatisfied"},
            ],
        },
        {
            "id": "q2",
            "text": "Which features did you use?",
            "type": "checkbox",
            "required": False,
            "options": [
                {"value": "search", "label": "Search"},
                {"value": "wishlist", "label": "Wishlist"},
                {"value": "coupons", "label": "Coupons"},
            ],
        },
        {
            "id": "q3",
            "text": "Anything we could do better?",
            "type": "text",
            "required": False,
        },
    ],
}


def init_store() -> DocumentStore:
    """Open the configured store (creates the data file or table)"""
    print(f"Opening {settings.STORAGE_BACKEND} store...")
    store = get_store()
    print("✓ Store ready")
    return store


def seed_data(store: DocumentStore):
    """Seed initial data"""
    print("\nSeeding initial data...")

    admin = ensure_admin(store, "admin@surveydesk.io", "admin12345", "System Administrator")
    if admin.role == "admin":
        print(f"✓ Admin user ready (email: {admin.email}, password: admin12345)")
    else:
        print(f"! {admin.email} exists without admin role; not promoted")

    try:
        UserRepository(store).register(
            UserCreate(email="user@surveydesk.io", password="user12345", name="Survey Editor")
        )
        print("✓ Sample user created (email: user@surveydesk.io, password: user12345)")
    except ConflictError:
        print("- Sample user already exists")

    surveys = SurveyRepository(store)
    if not surveys.list_all():
        survey = surveys.create(SurveyCreate.model_validate(SAMPLE_SURVEY))
        print(f"✓ Created active survey '{survey.title}'")

    print("\n✓ Store seeded successfully!")


if __name__ == "__main__":
    print("=" * 60)
    print("SurveyDesk - Store Initialization")
    print("=" * 60)

    seed_data(init_store())

    print("\n" + "=" * 60)
    print("Initialization complete!")
    print("=" * 60)
    print("\nYou can now access:")
    print("  - API: http://localhost:8000")
    print("  - API Docs: http://localhost:8000/docs")
    print("=" * 60)
