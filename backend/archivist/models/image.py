"""
Archivist Backend - Image SQLAlchemy Model
============================================

What:  ORM mapping of the image table (`"COMPANY"."T_BILD_BILDER"` by default).
How:   Python attribute names are English; column names are the upper-case
       identifiers of the bookkeeping schema. Schema and table name come from
       settings so the mapping also works against a plain SQLite file.
Who:   Queried by SqlAssetStore; created in tests via Base.metadata.

Table Layout:
    PK_BILD_BILDER               bigint primary key, the asset id
    FILECONTENT                  bytea, the scan/image payload
    FILENAME                     original filename, drives content type
    KLASSIFIKATION_1/_2          classification labels
    DATUM_ZUORD_OK               date the assignment was confirmed
    FINAL_CNT_FK_INP_BELEGE_ALL  number of linked receipts
    FINAL_CNT_FK_KON_PERSON      number of linked persons
"""

from datetime import date
from typing import Optional

from sqlalchemy import BigInteger, Date, Integer, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from archivist.config import settings
from archivist.database import Base


class Image(Base):
    """
    A stored scan or image. Read-only from this service's point of view.

    Query Patterns:
        - Point lookup: SELECT ... WHERE "PK_BILD_BILDER" = :id
          → primary key index, at most one row
    """

    __tablename__ = settings.asset_table
    __table_args__ = {"schema": settings.asset_schema}

    id: Mapped[int] = mapped_column(
        "PK_BILD_BILDER",
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=False,
    )
    content: Mapped[Optional[bytes]] = mapped_column("FILECONTENT", LargeBinary, nullable=True)
    filename: Mapped[Optional[str]] = mapped_column("FILENAME", String(255), nullable=True)

    # ── Classification Metadata ───────────────────────────────────────────
    classification_1: Mapped[Optional[str]] = mapped_column(
        "KLASSIFIKATION_1", String(255), nullable=True
    )
    classification_2: Mapped[Optional[str]] = mapped_column(
        "KLASSIFIKATION_2", String(255), nullable=True
    )
    assignment_confirmed_on: Mapped[Optional[date]] = mapped_column(
        "DATUM_ZUORD_OK", Date, nullable=True
    )
    receipt_count: Mapped[Optional[int]] = mapped_column(
        "FINAL_CNT_FK_INP_BELEGE_ALL", Integer, nullable=True
    )
    person_count: Mapped[Optional[int]] = mapped_column(
        "FINAL_CNT_FK_KON_PERSON", Integer, nullable=True
    )

    def __repr__(self) -> str:
        return f"<Image(id={self.id}, filename='{self.filename}')>"


# Client-facing metadata key → mapped attribute.
# Keys are the names clients of the legacy image endpoints already read.
METADATA_COLUMNS = {
    "klassifikation1": Image.classification_1,
    "klassifikation2": Image.classification_2,
    "datum_zuord_ok": Image.assignment_confirmed_on,
    "final_cnt_fk_inp_belege_all": Image.receipt_count,
    "final_cnt_fk_kon_person": Image.person_count,
}
