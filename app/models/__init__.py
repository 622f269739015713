# Campus Gate Pass: database models
# Import all models here for SQLAlchemy discovery

from app.models.user import User, UserRole                         # noqa
from app.models.gate_pass import GatePass, PassStatus              # noqa
from app.models.entry_exit_log import EntryExitLog, LogStatus      # noqa
