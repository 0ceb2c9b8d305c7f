# models package for SQLModel models
from .equipment import EquipmentRecord, EquipmentHistoryRecord  # noqa: F401  (import for metadata registration)
from .personnel import OperatorRecord, SupervisorRecord  # noqa: F401
