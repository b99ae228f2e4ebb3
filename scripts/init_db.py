from catalog.config import Settings
from catalog.db.engine import get_engine
from catalog.db.schema import metadata


def main():
    engine = get_engine(Settings.from_env().database_url)
    metadata.drop_all(engine)
    metadata.create_all(engine)
    print("DB schema created.")


if __name__ == "__main__":
    main()
