from __future__ import annotations

import enum

from sqlalchemy import JSON, Column, Date, Float, Integer, String, Text

from kennel.common.models import KennelRecord
from kennel.database import Base


class PuppyGender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"


class PuppyBreed(str, enum.Enum):
    SCOTTISH_TERRIER = "scottish_terrier"
    WEST_HIGHLAND_WHITE = "west_highland_white"
    CAIRN_TERRIER = "cairn_terrier"
    SKYE_TERRIER = "skye_terrier"
    MIXED = "mixed"


class PuppyStatus(str, enum.Enum):
    AVAILABLE = "available"
    RESERVED = "reserved"
    SOLD = "sold"
    NOT_FOR_SALE = "not_for_sale"


class PuppyColor(str, enum.Enum):
    BLACK = "black"
    WHEATEN = "wheaten"
    BRINDLE = "brindle"
    RED = "red"
    SILVER = "silver"
    CREAM = "cream"
    MIXED = "mixed"


class Puppy(KennelRecord, Base):
    __tablename__ = "puppies"

    name = Column(String(50), nullable=False)
    breed = Column(String(32), nullable=False, index=True)
    birth_date = Column(Date, nullable=False)
    gender = Column(String(16), nullable=False)
    color = Column(String(16), nullable=False)
    description = Column(Text, nullable=True)
    personality_traits = Column(Text, nullable=True)

    status = Column(String(32), nullable=False, default=PuppyStatus.AVAILABLE.value, index=True)
    price = Column(Integer, nullable=True)
    currency = Column(String(8), nullable=False, default="TWD")

    microchip_id = Column(String(15), nullable=True)
    birth_weight = Column(Float, nullable=True)  # grams
    current_weight = Column(Float, nullable=True)  # grams
    expected_adult_weight = Column(Float, nullable=True)  # kilograms

    pedigree_info = Column(JSON, nullable=False, default=dict)
    health_checks = Column(JSON, nullable=False, default=list)
    vaccination_records = Column(JSON, nullable=False, default=list)

    cover_image = Column(String(1024), nullable=True)
    images = Column(JSON, nullable=False, default=list)
    pedigree_documents = Column(JSON, nullable=False, default=list)
    health_certificates = Column(JSON, nullable=False, default=list)
