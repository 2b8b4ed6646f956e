from databases import Database

from cruxboard.config import config

database = Database(str(config.pg_dsn))
