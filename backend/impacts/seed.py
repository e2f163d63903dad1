"""
Reference data loaded at startup: activity lookup tables and the static
milestone definitions. Seeding is idempotent: a table that already has rows
is left alone.
"""

import logging
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from impacts.models.lookup import ActivityCategory, SimulationType, FeedbackFormType
from impacts.models.milestone import MilestoneCategory, MilestoneItem

logger = logging.getLogger(__name__)

ACTIVITY_CATEGORIES = [
    "General Admin",
    "PECC Education",
    "Mentor Meeting",
    "Simulation Prep",
    "Simulation Facilitation",
    "Hospital ED Education",
    "Policies",
    "QI/PI",
    "Collaborative",
    "Staffing",
    "Disaster Planning",
    "Injury Prevention",
    "Equipment",
    "Special Needs",
]

SIMULATION_TYPES = [
    "In Situ",
    "Lab Based",
    "Mobile Simulation",
    "Tabletop",
]

FEEDBACK_FORM_TYPES = [
    "Participant Survey",
    "Facilitator Debrief",
    "Site Report",
]

PEDIATRIC_READINESS_URL = "https://www.pedsready.org"

MILESTONES = [
    ("Initial Steps", [
        ("Identify a Pediatric Emergency Care Coordinator",
         "Designate a physician and/or nurse PECC for the emergency department.", None, None),
        ("Complete the Pediatric Readiness Assessment",
         "Submit the national pediatric readiness assessment for your facility.",
         PEDIATRIC_READINESS_URL, "Pediatric Readiness Assessment"),
        ("Meet with hospital leadership",
         "Review the readiness gap report with ED and nursing leadership.", None, None),
    ]),
    ("Ongoing Activities", [
        ("Attend monthly collaborative calls",
         "Join the regional coordinator collaborative call each month.", None, None),
        ("Log coordinator hours",
         "Record time spent on readiness work in the activity log.", None, None),
    ]),
    ("Pediatric Readiness Survey", [
        ("Review survey gap analysis",
         "Walk through each gap identified in the readiness survey score.", None, None),
    ]),
    ("Equipment", [
        ("Audit pediatric equipment and supplies",
         "Check every size of airway, vascular access and monitoring equipment.", None, None),
        ("Set up a length-based resuscitation tape or system", None, None, None),
    ]),
    ("Patient Safety", [
        ("Weigh and record children in kilograms",
         "Ensure weights are measured and documented only in kilograms.", None, None),
        ("Adopt pre-calculated medication dosing",
         "Provide weight-based dosing references in every resuscitation area.", None, None),
    ]),
    ("Staffing", [
        ("Track pediatric competencies",
         "Maintain a competency roster for physicians and nurses.", None, None),
    ]),
    ("Policies", [
        ("Update pediatric triage policy", None, None, None),
        ("Establish interfacility transfer guidelines",
         "Agree written transfer agreements with pediatric receiving centers.", None, None),
    ]),
    ("Quality Improvement", [
        ("Add pediatric measures to the ED QI plan",
         "Monitor pediatric-specific indicators as part of the ED QI program.", None, None),
    ]),
]


async def _seed_lookup(db: AsyncSession, model, names: list[str]) -> None:
    if await db.scalar(select(func.count(model.id))):
        return
    db.add_all(model(name=name) for name in names)
    logger.info("Seeded %d rows into %s", len(names), model.__tablename__)


async def _seed_milestones(db: AsyncSession) -> None:
    if await db.scalar(select(func.count(MilestoneCategory.id))):
        return
    for category_order, (category_name, items) in enumerate(MILESTONES, start=1):
        category = MilestoneCategory(name=category_name, display_order=category_order)
        category.items = [
            MilestoneItem(
                title=title,
                description=description,
                link_url=link_url,
                link_text=link_text,
                display_order=item_order,
            )
            for item_order, (title, description, link_url, link_text) in enumerate(items, start=1)
        ]
        db.add(category)
    logger.info("Seeded %d milestone categories", len(MILESTONES))


async def seed_reference_data(db: AsyncSession) -> None:
    await _seed_lookup(db, ActivityCategory, ACTIVITY_CATEGORIES)
    await _seed_lookup(db, SimulationType, SIMULATION_TYPES)
    await _seed_lookup(db, FeedbackFormType, FEEDBACK_FORM_TYPES)
    await _seed_milestones(db)
    await db.commit()
