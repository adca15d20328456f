"""
Create the clinic tables, or print their DDL.
Run with: python init_db.py            (create tables on the configured database)
          python init_db.py --ddl mysql (print CREATE statements for a dialect)
"""

import argparse
import logging
from sqlalchemy.engine import make_url
from sqlalchemy.schema import CreateIndex, CreateTable
from database import engine, Base
import models

logger = logging.getLogger(__name__)


def render_ddl(dialect: str = "mysql") -> str:
    """CREATE TABLE and CREATE INDEX statements for every table, in dependency order."""
    sql_dialect = make_url(f"{dialect}://").get_dialect()()
    statements = []
    for table in Base.metadata.sorted_tables:
        statements.append(str(CreateTable(table).compile(dialect=sql_dialect)).strip() + ";")
        for index in sorted(table.indexes, key=lambda i: i.name):
            statements.append(str(CreateIndex(index).compile(dialect=sql_dialect)).strip() + ";")
    return "\n\n".join(statements)


def init(bind=engine):
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=bind)
    logger.info("Created tables: %s", ", ".join(t.name for t in Base.metadata.sorted_tables))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--ddl", nargs="?", const="mysql", metavar="DIALECT",
                        help="print DDL for DIALECT (default mysql) instead of creating tables")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)
    if args.ddl:
        print(render_ddl(args.ddl))
    else:
        init()
