import logging

from sqlalchemy.orm import Session

from services.catalog_service.repository import ProductRepository

logger = logging.getLogger(__name__)

# (name, description, price, category, image, featured, discount)
SAMPLE_PRODUCTS = [
    ("Kashmiri Red Chilli", "Deep red, mildly hot chilli powder for colour and warmth", 180.0, "spices", "/images/kashmiri-chilli.jpg", True, 10),
    ("Turmeric Powder", "Stone-ground Lakadong turmeric with high curcumin content", 150.0, "spices", "/images/turmeric.jpg", True, 0),
    ("Green Cardamom", "Whole bold green cardamom pods from Idukki", 450.0, "spices", "/images/cardamom.jpg", False, 15),
    ("Black Pepper", "Sun-dried Tellicherry black peppercorns", 260.0, "spices", "/images/black-pepper.jpg", False, 0),
    ("Dried Curry Leaves", "Shade-dried curry leaves for tempering", 90.0, "herbs", "/images/curry-leaves.jpg", False, 0),
    ("Kasuri Methi", "Dried fenugreek leaves for curries and breads", 110.0, "herbs", "/images/kasuri-methi.jpg", False, 5),
    ("Garam Masala", "House blend of twelve roasted whole spices", 220.0, "blends", "/images/garam-masala.jpg", True, 20),
    ("Sambar Powder", "South Indian lentil stew blend with roasted dals", 160.0, "blends", "/images/sambar.jpg", False, 0),
    ("Chaat Masala", "Tangy blend of amchur, black salt and cumin", 120.0, "seasonings", "/images/chaat-masala.jpg", False, 0),
    ("Pink Rock Salt", "Coarse Himalayan rock salt", 70.0, "seasonings", "/images/rock-salt.jpg", False, 0),
]


def seed_products(db: Session) -> int:
    """Insert the sample catalog, skipping products that already exist. Returns the number added."""
    logger.info("Seeding products...")
    repo = ProductRepository(db)
    added = 0

    for name, description, price, category, image_url, featured, discount in SAMPLE_PRODUCTS:
        if repo.get_by_name(name):
            logger.info(f"Product {name} already exists, skipping")
            continue

        repo.create_product(
            name=name,
            description=description,
            price=price,
            category=category,
            image_url=image_url,
            featured=featured,
            discount=discount,
        )
        added += 1

    db.commit()
    logger.info(f"Seeded {added} of {len(SAMPLE_PRODUCTS)} products")
    return added
