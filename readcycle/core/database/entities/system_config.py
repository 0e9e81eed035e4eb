"""
System configuration entity.

A single row (id 1) holding switches an administrator can flip at runtime.
"""

from typing import Optional

from sqlmodel import Field

from ..base import AuditedBase

SYSTEM_CONFIG_ID = 1


class SystemConfig(AuditedBase, table=True):
    """Persistent runtime switches.

    Table: system_config
    """

    __tablename__ = "system_config"

    id: Optional[int] = Field(default=SYSTEM_CONFIG_ID, primary_key=True)
    maintenance_mode: bool = Field(default=False, description="Reject member traffic with 503")
