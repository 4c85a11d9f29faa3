"""Seed a small cohort plus the demo guest. Run: python scripts/seed_demo.py"""

import asyncio
import logging
import os
import sys
from datetime import date, timedelta

# Add parent directory to path so we can import app modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from app.core.enums import Goal
from app.db.session import async_session_maker, engine
from app.services.demo import DEMO_JOURNEY, reset_demo_user, seed_user

logger = logging.getLogger("seed_demo")

BASE = date(2026, 1, 15)

# name, goal, start offset, [(day, weight, muscle, fat mass, fat %, bmi, water, visceral, bmr, score)]
COHORT = [
    ("Ming", Goal.CUT, 0, [
        (0, 78.5, 33.2, 17.3, 22.0, 25.8, 42.1, 9, 1620, 72),
        (10, 77.8, 33.4, 16.2, 20.8, 25.5, 42.3, 9, 1625, 74),
        (21, 76.5, 33.5, 14.9, 19.5, 25.1, 42.4, 8, 1630, 76),
        (32, 75.8, 33.7, 14.0, 18.5, 24.9, 42.5, 8, 1635, 78),
        (45, 75.2, 33.8, 13.2, 17.5, 24.7, 42.7, 7, 1640, 80),
    ]),
    ("Hua", Goal.CUT, 3, [
        (0, 82.0, 30.1, 23.0, 28.0, 27.5, 39.8, 11, 1550, 65),
        (14, 81.2, 30.3, 22.0, 27.1, 27.2, 40.0, 11, 1555, 66),
        (30, 80.5, 30.5, 21.0, 26.1, 27.0, 40.2, 10, 1560, 68),
        (42, 80.0, 30.6, 20.4, 25.5, 26.8, 40.3, 10, 1565, 69),
    ]),
    ("Mei", Goal.BULK, 5, [
        (0, 55.0, 22.0, 14.3, 26.0, 21.5, 30.1, 4, 1250, 70),
        (20, 55.6, 22.4, 14.2, 25.5, 21.7, 30.5, 4, 1262, 72),
        (40, 56.1, 22.9, 14.0, 25.0, 21.9, 30.9, 4, 1275, 74),
    ]),
]


async def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    async with async_session_maker() as session:
        for name, goal, offset, journey in COHORT:
            user = await seed_user(session, name, goal, BASE + timedelta(days=offset), journey)
            logger.info("Seeded %s (id=%s, %d reports)", name, user.id, len(journey))
        demo = await reset_demo_user(session)
        logger.info("Demo guest id=%s (%d reports)", demo.id, len(DEMO_JOURNEY))
        await session.commit()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
