"""RestaurantEntry model — one row per business returned by Yelp."""

from sqlalchemy import BigInteger, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class RestaurantEntry(Base):
    __tablename__ = "yelps"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    price: Mapped[str | None] = mapped_column(String(8), nullable=True)
    rating: Mapped[float] = mapped_column(Float, nullable=False)
    url: Mapped[str] = mapped_column(String(1024), nullable=False)
    location_id: Mapped[int] = mapped_column(
        ForeignKey("locations.id"), nullable=False, index=True,
    )
    # epoch milliseconds
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
