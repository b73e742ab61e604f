"""Platform-owned persistence layer (database and stores)."""

from .database import SCHEMA_VERSION, connect, get_connection, get_db_path, init_db, transaction
from .litter_store import LitterStore
from .mother_store import MotherStore
from .offspring_store import OffspringStore
from .report_store import ReportStore
