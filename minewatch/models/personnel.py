from sqlmodel import SQLModel, Field


class OperatorRecord(SQLModel, table=True):
    __tablename__ = "operators"

    id: str = Field(primary_key=True)
    first_name: str = Field(index=True)
    last_name: str = Field(index=True)
    license: str
    equipment_id: str = Field(index=True)


class SupervisorRecord(SQLModel, table=True):
    __tablename__ = "supervisors"

    id: str = Field(primary_key=True)
    first_name: str = Field(index=True)
    last_name: str = Field(index=True)
    equipment_id: str = Field(index=True)
