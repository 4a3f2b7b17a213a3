import os
import sys

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from config import settings
from utils.deps import build_storage
from utils.seed import seed_categories, seed_products


def populate():
    """Seeds default categories and demo products into the configured storage."""
    storage = build_storage(settings)

    created = seed_categories(storage)
    print(f"Categories: added {len(created)}, total {len(storage.get_all_categories())}.")

    added = seed_products(storage)
    print(f"Products: added {added}, total {len(storage.get_all_products())}.")

    if settings.STORAGE_BACKEND == "memory":
        print("Note: STORAGE_BACKEND=memory, data is lost when this process exits.")


if __name__ == "__main__":
    populate()
