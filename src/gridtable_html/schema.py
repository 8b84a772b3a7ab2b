"""Pydantic model for the grid-table handler options."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HandlerOptions(BaseModel):
    """Options accepted by ``grid_table_handler``.

    ``no_header`` (alias ``noHeader``) suppresses the ``thead``/``tbody``
    wrappers, emitting header and body rows directly under ``table``.  It has
    no effect when the table has footer rows: a footer always forces the full
    ``thead``/``tbody``/``tfoot`` grouping.  A null value means the default.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    no_header: bool = Field(default=False, alias="noHeader")

    @field_validator("no_header", mode="before")
    @classmethod
    def null_means_default(cls, value):
        """Treat an explicit null (forwarded optional JSON options) as False."""
        return False if value is None else value
