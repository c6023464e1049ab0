import argparse

from credit_pricing import config
from credit_pricing.db.base import Base
from credit_pricing.db.session import build_engine, build_session_factory
from credit_pricing.models import credit_rows  # noqa: F401
from credit_pricing.services.errors import CreditPricingError
from credit_pricing.services.ingestion_service import ingest_file


def main(argv=None):
    parser = argparse.ArgumentParser(description="Import a CSV file of credit records.")
    parser.add_argument("path", help="CSV file with a header row")
    parser.add_argument("--database-url", default=config.DATABASE_URL)
    args = parser.parse_args(argv)

    engine = build_engine(args.database_url)
    Base.metadata.create_all(bind=engine)
    db = build_session_factory(engine)()
    try:
        result = ingest_file(db, args.path)
    except CreditPricingError as exc:
        raise SystemExit(f"Import failed: {exc.message}")
    except OSError as exc:
        raise SystemExit(f"Cannot read {args.path}: {exc}")
    finally:
        db.close()
        engine.dispose()

    print(f"Imported rows: {result['storedCount']}")
    return result


if __name__ == "__main__":
    main()
