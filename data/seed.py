from pathlib import Path
import sys

# Ensure project root is on sys.path so `from models import ...` works whether this
# script is run inside the container or from the repository root.
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlmodel import Session
from models import Category, Mode, Product, Store, User
from config.database import engine, create_db_and_tables
from utils.logger import setup_logger

logger = setup_logger(__name__)


def seed():
    create_db_and_tables()
    with Session(engine) as s:
        gadgets = Store(name="Gadget Corner", store_type=Mode.SHOP)
        books = Store(name="Paper Trail Books", store_type=Mode.SHOP)
        pasta = Store(name="Pasta Place", store_type=Mode.FOOD, cuisine="Italian")
        tacos = Store(name="Spice Hub", store_type=Mode.FOOD, cuisine="Mexican")
        electronics = Category(name="Electronics")
        fiction = Category(name="Fiction")
        for row in (gadgets, books, pasta, tacos, electronics, fiction):
            s.add(row)
        s.flush()

        products = [
            Product(name="USB-C Charger", price=19.9, store_id=gadgets.id, category_id=electronics.id, popularity=42),
            Product(name="Noise Cancelling Headphones", price=129.0, store_id=gadgets.id, category_id=electronics.id, popularity=35),
            Product(name="Smart Plug", price=24.5, store_id=gadgets.id, category_id=electronics.id),
            Product(name="Mystery Novel", price=12.0, store_id=books.id, category_id=fiction.id, popularity=18),
            Product(name="Margherita Pizza", price=12.5, store_id=pasta.id, product_type=Mode.FOOD, cuisine="Italian", popularity=50),
            Product(name="Beef Lasagna", price=14.0, store_id=pasta.id, product_type=Mode.FOOD, cuisine="Italian", popularity=27),
            Product(name="Spicy Beef Taco", price=4.5, store_id=tacos.id, product_type=Mode.FOOD, cuisine="Mexican", popularity=33),
            Product(name="Tofu Bowl", price=9.0, store_id=tacos.id, product_type=Mode.FOOD, cuisine="Mexican", popularity=12),
        ]
        for p in products:
            s.add(p)

        s.add(User(email="demo@example.com"))

        s.commit()
        logger.info("Database seeded successfully", extra={"stores": 4, "products": len(products)})


if __name__ == "__main__":
    seed()
