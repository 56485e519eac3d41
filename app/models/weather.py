"""WeatherEntry model — one row per forecast day per location."""

from sqlalchemy import BigInteger, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class WeatherEntry(Base):
    __tablename__ = "weathers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    forecast: Mapped[str] = mapped_column(Text, nullable=False)
    time: Mapped[str] = mapped_column(String(15), nullable=False)
    location_id: Mapped[int] = mapped_column(
        ForeignKey("locations.id"), nullable=False, index=True,
    )
    # epoch milliseconds
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
