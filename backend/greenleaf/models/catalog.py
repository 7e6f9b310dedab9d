from __future__ import annotations

from ..extensions import db
from greenleaf.time_utils import to_utc_z


class WeedmapsProduct(db.Model):
    """
    Listing published to the external Weedmaps marketplace.

    Independent of Product: there is no foreign key between the two, the
    listing carries its own copy of the catalog metadata.
    """
    __tablename__ = "weedmaps_products"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    weedmaps_id = db.Column(db.String(64), nullable=True, index=True)
    external_id = db.Column(db.String(64), nullable=True)

    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    published = db.Column(db.Boolean, nullable=False, default=True)
    featured = db.Column(db.Boolean, nullable=False, default=False)

    picture = db.Column(db.String(512), nullable=True)
    gallery_images = db.Column(db.Text, nullable=True)  # comma separated URLs
    category = db.Column(db.String(64), nullable=True)
    tags = db.Column(db.String(255), nullable=True)
    strain = db.Column(db.String(128), nullable=True)
    genetics = db.Column(db.String(128), nullable=True)
    cbd_percentage = db.Column(db.Float, nullable=True)
    thc_percentage = db.Column(db.Float, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "weedmaps_id": self.weedmaps_id,
            "external_id": self.external_id,
            "name": self.name,
            "description": self.description,
            "published": self.published,
            "featured": self.featured,
            "picture": self.picture,
            "gallery_images": self.gallery_images,
            "category": self.category,
            "tags": self.tags,
            "strain": self.strain,
            "genetics": self.genetics,
            "cbd_percentage": self.cbd_percentage,
            "thc_percentage": self.thc_percentage,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
