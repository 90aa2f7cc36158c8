from __future__ import annotations

from ..extensions import db


class Product(db.Model):
    """
    Product listing.

    - id is a caller-visible, time-derived token (see identifier_service).
    - price is free text, exactly as the seller typed it.
    - owner is the username that listed the product; NULL means anyone may
      delete it.
    - image is the stored filename under UPLOAD_FOLDER, if any.
    """
    __tablename__ = "products"
    __table_args__ = (
        db.Index("ix_products_owner", "owner"),
    )

    id = db.Column(db.String(32), primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    price = db.Column(db.String(64), nullable=True)
    stock = db.Column(db.Integer, nullable=False, default=0)
    image = db.Column(db.String(255), nullable=True)
    owner = db.Column(db.String(64), nullable=True)

    def __repr__(self) -> str:
        return f"<Product id={self.id!r} title={self.title!r} owner={self.owner!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "stock": self.stock,
            "image": self.image,
            "owner": self.owner,
        }
