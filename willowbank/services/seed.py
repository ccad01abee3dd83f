# willowbank/services/seed.py
"""
Default data for a fresh store.

Requirements are seeded automatically on first start; the plant catalogue
is seeded on request through the plants service.
"""

import logging

from willowbank.models.requests import RequirementCreate
from willowbank.models.store import RecordStore
from willowbank.services.updates import build_insert

logger = logging.getLogger(__name__)

DEFAULT_REQUIREMENTS = [
    {"category": "needs", "description": "Regulatory compliance (setbacks, MWELO)", "priority": 1},
    {"category": "needs", "description": "Privacy screening along road", "priority": 2},
    {"category": "needs", "description": "Drought-tolerant landscaping", "priority": 3},
    {"category": "needs", "description": "Safe play area for children", "priority": 4},
    {"category": "wants", "description": "Native plants for pollinators", "priority": 1},
    {"category": "wants", "description": "Raised beds for vegetables/herbs/fruits", "priority": 2},
    {"category": "wants", "description": "Wildlife habitat and corridors", "priority": 3},
    {"category": "wants", "description": "Low-maintenance design", "priority": 4},
    {"category": "nice-to-haves", "description": "Outdoor entertaining space", "priority": 1},
    {"category": "nice-to-haves", "description": "Seasonal color displays", "priority": 2},
    {"category": "nice-to-haves", "description": "Rain collection system", "priority": 3},
    {"category": "nice-to-haves", "description": "Composting area", "priority": 4},
]

DEFAULT_PLANTS = [
    # Privacy/screening
    {
        "common_name": "Ceanothus 'Ray Hartman'",
        "scientific_name": "Ceanothus 'Ray Hartman'",
        "category": "privacy",
        "water_needs": "low",
        "sun_requirements": "full-sun",
        "mature_size": "12-20 feet tall, 12-20 feet wide",
        "bloom_time": "March-May",
        "native": True,
        "drought_tolerant": True,
        "wildlife_value": "Excellent for bees and butterflies",
        "recommended": True,
        "notes": "Fast-growing native shrub, excellent for screening",
        "bloom_color": "Blue",
        "foliage_type": "evergreen",
    },
    {
        "common_name": "Toyon",
        "scientific_name": "Heteromeles arbutifolia",
        "category": "privacy",
        "water_needs": "low",
        "sun_requirements": "full-sun",
        "mature_size": "8-15 feet tall, 8-10 feet wide",
        "bloom_time": "June-July",
        "native": True,
        "drought_tolerant": True,
        "wildlife_value": "Berries attract birds, flowers attract bees",
        "recommended": True,
        "notes": "California native with red berries in winter",
        "bloom_color": "White",
        "foliage_type": "evergreen",
    },
    # Pollinators
    {
        "common_name": "Spanish Lavender",
        "scientific_name": "Lavandula stoechas",
        "category": "pollinators",
        "water_needs": "low",
        "sun_requirements": "full-sun",
        "mature_size": "2-3 feet tall, 2-3 feet wide",
        "bloom_time": "Spring through fall",
        "native": False,
        "drought_tolerant": True,
        "wildlife_value": "Excellent for bees and butterflies",
        "recommended": True,
        "notes": "Continuous bloomer, fragrant foliage",
        "bloom_color": "Purple",
        "foliage_type": "evergreen",
    },
    {
        "common_name": "California Poppy",
        "scientific_name": "Eschscholzia californica",
        "category": "pollinators",
        "water_needs": "low",
        "sun_requirements": "full-sun",
        "mature_size": "12-18 inches tall, 12 inches wide",
        "bloom_time": "Spring through fall",
        "native": True,
        "drought_tolerant": True,
        "wildlife_value": "Attracts beneficial insects",
        "recommended": True,
        "notes": "State flower, self-seeding annual",
        "bloom_color": "Orange",
    },
    {
        "common_name": "Salvia 'May Night'",
        "scientific_name": "Salvia nemorosa 'May Night'",
        "category": "pollinators",
        "water_needs": "moderate",
        "sun_requirements": "full-sun",
        "mature_size": "18-24 inches tall, 12-18 inches wide",
        "bloom_time": "May through September",
        "native": False,
        "drought_tolerant": True,
        "wildlife_value": "Attracts bees, butterflies, and hummingbirds",
        "recommended": True,
        "notes": "Perennial with purple flower spikes",
        "bloom_color": "Violet",
        "foliage_type": "deciduous",
    },
    # Trees
    {
        "common_name": "Coast Live Oak",
        "scientific_name": "Quercus agrifolia",
        "category": "trees",
        "water_needs": "low",
        "sun_requirements": "full-sun",
        "mature_size": "20-70 feet tall, 25-90 feet wide",
        "bloom_time": "Spring (catkins)",
        "native": True,
        "drought_tolerant": True,
        "wildlife_value": "Supports hundreds of insect species, acorns feed wildlife",
        "recommended": True,
        "notes": "Iconic California oak, check setback requirements",
        "foliage_type": "evergreen",
    },
    {
        "common_name": "Western Redbud",
        "scientific_name": "Cercis occidentalis",
        "category": "trees",
        "water_needs": "low",
        "sun_requirements": "partial-sun",
        "mature_size": "10-18 feet tall, 10-15 feet wide",
        "bloom_time": "March-April",
        "native": True,
        "drought_tolerant": True,
        "wildlife_value": "Early nectar source, seeds eaten by birds",
        "recommended": True,
        "notes": "Beautiful spring flowers before leaves emerge",
        "bloom_color": "Magenta",
        "foliage_type": "deciduous",
    },
    # Vegetables/herbs
    {
        "common_name": "Rosemary",
        "scientific_name": "Rosmarinus officinalis",
        "category": "vegetables",
        "water_needs": "low",
        "sun_requirements": "full-sun",
        "mature_size": "2-6 feet tall, 2-4 feet wide",
        "bloom_time": "Winter through spring",
        "native": False,
        "drought_tolerant": True,
        "wildlife_value": "Flowers attract bees",
        "recommended": True,
        "notes": "Culinary herb, evergreen shrub",
        "foliage_type": "evergreen",
    },
    {
        "common_name": "Mediterranean Sage",
        "scientific_name": "Salvia officinalis",
        "category": "vegetables",
        "water_needs": "low",
        "sun_requirements": "full-sun",
        "mature_size": "12-24 inches tall, 18-24 inches wide",
        "bloom_time": "Summer",
        "native": False,
        "drought_tolerant": True,
        "wildlife_value": "Flowers attract pollinators",
        "recommended": True,
        "notes": "Culinary herb, silvery foliage",
        "foliage_type": "semi-evergreen",
    },
    # Wildlife
    {
        "common_name": "Coyote Brush",
        "scientific_name": "Baccharis pilularis",
        "category": "wildlife",
        "water_needs": "low",
        "sun_requirements": "full-sun",
        "mature_size": "3-8 feet tall, 6-12 feet wide",
        "bloom_time": "Fall",
        "native": True,
        "drought_tolerant": True,
        "wildlife_value": "Important late-season nectar source, nesting habitat",
        "recommended": True,
        "notes": "Hardy native shrub, excellent wildlife plant",
        "foliage_type": "evergreen",
    },
    # Groundcover
    {
        "common_name": "Ceanothus Groundcover",
        "scientific_name": "Ceanothus griseus horizontalis",
        "category": "groundcover",
        "water_needs": "low",
        "sun_requirements": "full-sun",
        "mature_size": "2-3 feet tall, 6-15 feet wide",
        "bloom_time": "March-May",
        "native": True,
        "drought_tolerant": True,
        "wildlife_value": "Excellent for pollinators",
        "recommended": True,
        "notes": "Fast-spreading groundcover with blue flowers",
        "bloom_color": "Blue",
        "foliage_type": "evergreen",
    },
]


async def seed_default_requirements(store: RecordStore) -> int:
    """
    Seed the default requirements when the table is empty.

    Returns:
        Number of requirements inserted (0 if data already existed)
    """
    counted = await store.fetch_one("SELECT COUNT(*) AS count FROM requirements")
    if counted and counted["count"] > 0:
        logger.info("Database already contains requirements, skipping seed")
        return 0

    for requirement in DEFAULT_REQUIREMENTS:
        model = RequirementCreate.model_validate(requirement)
        sql, args = build_insert(
            "requirements", model.model_dump(mode="json"), frozenset({"completed"})
        )
        await store.execute(sql, args)

    logger.info(f"Seeded {len(DEFAULT_REQUIREMENTS)} default requirements")
    return len(DEFAULT_REQUIREMENTS)
