"""
Demo data set: a handful of users, Sofia-area offerings and their history.

Loaded at startup when SEED_DEMO_DATA=true (in-memory store), or into
Supabase with ``python seed_demo_data.py``. Everything goes through the
services so counters and hashes come out exactly as real traffic would
produce them.
"""

import logging
from datetime import datetime, timedelta, timezone

from app.domain.enums import UserRole
from app.domain.errors import UserExistsError
from app.domain.models import GeoPoint, OfferingCreate
from app.ports.database_port import DatabasePort
from app.services.application_service import ApplicationService
from app.services.offering_service import OfferingService
from app.services.user_service import hash_password

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "demo"

# (username, email, rating, completed_jobs, role)
DEMO_USERS = [
    ("demo", "demo@jobconnect.com", 4.8, 1, UserRole.ADMIN),
    ("ivan_petrov", "ivan.petrov@example.com", 4.9, 1, UserRole.USER),
    ("gosho_ivanov", "gosho.ivanov@example.com", 4.7, 1, UserRole.USER),
    ("stoyanka_gerginova", "stoyanka.gerginova@example.com", 4.6, 1, UserRole.USER),
    ("penko_michev", "penko.michev@example.com", 4.5, 1, UserRole.USER),
    ("vlado_shefa", "vlado.shefa@example.com", 4.4, 0, UserRole.USER),
]

# (requestor username, label, description, lat, lng, pay/h, max hours, featured)
DEMO_OFFERINGS = [
    ("ivan_petrov", "I need a person to mow my yard",
     "I struggle with mowing due to my disabilities so I would need someone to help me.",
     42.694558, 23.322851, 15, 2, False),
    ("gosho_ivanov", "Help with moving furniture",
     "Need assistance moving a few heavy items to the new apartment.",
     42.6977, 23.3219, 20, 3, False),
    ("stoyanka_gerginova", "Garden cleanup and pruning",
     "Looking for someone to clean up the garden and prune the bushes.",
     42.6915, 23.3250, 12, 4, False),
    ("penko_michev", "Pet walking service",
     "Need someone to walk my dog twice a day for a week.",
     42.6960, 23.3200, 10, 1, False),
    ("ivan_petrov", "House cleaning before guests arrive",
     "Deep cleaning needed for upcoming family visit.",
     42.6925, 23.3245, 18, 5, False),
    ("gosho_ivanov", "Computer setup and troubleshooting",
     "Need help setting up a new computer and installing software.",
     42.6980, 23.3220, 25, 3, False),
    ("stoyanka_gerginova", "Painting a small room",
     "Help with painting a bedroom, all materials provided.",
     42.6930, 23.3215, 16, 6, False),
    ("gosho_ivanov", "Premium Home Renovation Project",
     "Looking for skilled professionals to help with a complete home renovation.",
     42.7000, 23.3300, 35, 40, True),
    ("gosho_ivanov", "Luxury Garden Design & Landscaping",
     "Transform our backyard into a beautiful garden paradise.",
     42.7050, 23.3350, 30, 25, True),
]

# (offering index in DEMO_OFFERINGS, applicant username, message)
DEMO_APPLICATIONS = [
    (0, "gosho_ivanov", "I have experience with yard work and can help you with this."),
    (0, "stoyanka_gerginova", "I would love to help you with the yard work."),
    (0, "penko_michev", "I can help with the mowing, I have my own equipment."),
    (1, "vlado_shefa", "I am strong and can help with moving heavy items."),
    (3, "demo", "I love dogs and would be happy to walk your pet."),
    (3, "ivan_petrov", "I have experience with pet care and walking."),
    (3, "gosho_ivanov", "I can walk your dog twice daily as requested."),
    (4, "gosho_ivanov", "I have experience with deep cleaning and can help."),
    (4, "stoyanka_gerginova", "I can help with the deep cleaning for your family visit."),
]


# (title, description, lat, lng, pay/h, hours, completed by, completed for, days ago, rating)
DEMO_COMPLETED_JOBS = [
    ("Garden Cleanup Project",
     "Cleaned up the backyard garden, removed weeds, and pruned bushes",
     42.6915, 23.3250, 12, 4, "ivan_petrov", "gosho_ivanov", 7, 4.8),
    ("Furniture Moving Service",
     "Helped move heavy furniture to new apartment",
     42.6977, 23.3219, 20, 3, "stoyanka_gerginova", "ivan_petrov", 14, 4.9),
    ("Pet Walking Service",
     "Walked the dog twice daily for a week",
     42.6960, 23.3200, 10, 7, "penko_michev", "vlado_shefa", 21, 4.7),
    ("House Deep Cleaning",
     "Complete deep cleaning before family visit",
     42.6925, 23.3245, 18, 5, "gosho_ivanov", "demo", 30, 4.9),
    ("Computer Setup and Troubleshooting",
     "Set up new computer and installed necessary software",
     42.6980, 23.3220, 25, 3, "demo", "stoyanka_gerginova", 45, 4.8),
]

DEMO_USERNAME = DEMO_USERS[0][0]

# Created only by the full seed, so its presence means the set is loaded
_SEED_MARKER = DEMO_USERS[1][0]


def _user_row(
    username: str,
    email: str,
    rating: float,
    completed: int,
    role: UserRole,
    password_hash: str,
) -> dict:
    return {
        "username": username,
        "email": email,
        "password_hash": password_hash,
        "role": role.value,
        "rating": rating,
        "completed_jobs": completed,
    }


async def ensure_demo_user(db: DatabasePort) -> bool:
    """
    Create the shared demo account if it is missing. Returns True when it
    was created. Created this way it is a regular user; only the full seed
    makes it an admin.
    """
    if await db.find_user_by_login(DEMO_USERNAME):
        return False

    _, email, rating, completed, _ = DEMO_USERS[0]
    try:
        await db.create_user(
            _user_row(
                DEMO_USERNAME, email, rating, completed,
                UserRole.USER, hash_password(DEMO_PASSWORD),
            )
        )
    except UserExistsError:
        return False
    logger.info("Demo user created")
    return True


async def seed_demo_data(db: DatabasePort) -> None:
    """Insert the demo set. Skips everything if it is already loaded."""
    if await db.find_user_by_login(_SEED_MARKER):
        logger.info("Demo data already present, skipping seed")
        return

    password_hash = hash_password(DEMO_PASSWORD)
    user_ids: dict[str, str] = {}
    for username, email, rating, completed, role in DEMO_USERS:
        # The demo account may already exist from POST /api/auth/demo-user
        user = await db.find_user_by_login(username) or await db.create_user(
            _user_row(username, email, rating, completed, role, password_hash)
        )
        user_ids[username] = user["id"]

    offerings = OfferingService(db)
    offering_ids: list[str] = []
    for owner, label, description, lat, lng, pay, hours, featured in DEMO_OFFERINGS:
        offering = await offerings.create(
            user_ids[owner],
            OfferingCreate(
                label=label,
                description=description,
                location=GeoPoint(lat=lat, lng=lng),
                payment_per_hour=pay,
                max_hours=hours,
            ),
        )
        if featured:
            await offerings.set_featured(offering.id, True)
        offering_ids.append(offering.id)

    applications = ApplicationService(db)
    for index, applicant, message in DEMO_APPLICATIONS:
        await applications.apply(offering_ids[index], user_ids[applicant], message)

    now = datetime.now(timezone.utc)
    for title, description, lat, lng, pay, hours, by, for_, days_ago, rating in DEMO_COMPLETED_JOBS:
        await db.create_completed_job(
            {
                "job_title": title,
                "description": description,
                "location": {"lat": lat, "lng": lng},
                "payment_per_hour": pay,
                "hours_worked": hours,
                "total_payment": pay * hours,
                "completed_by": user_ids[by],
                "completed_for": user_ids[for_],
                "completed_at": now - timedelta(days=days_ago),
                "rating": rating,
            }
        )

    logger.info(
        "Seeded %d users, %d offerings, %d applications, %d completed jobs",
        len(DEMO_USERS), len(DEMO_OFFERINGS), len(DEMO_APPLICATIONS), len(DEMO_COMPLETED_JOBS),
    )
