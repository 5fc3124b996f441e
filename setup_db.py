"""Create the AutoLead tables and seed demo data against DATABASE_URL."""

from autolead.app.core.dev_seed import init_db
from autolead.app.core.settings import get_settings
from autolead.app.db.session import Database


def main() -> None:
    database = Database(get_settings().database_url)
    try:
        init_db(database)
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
