"""Database package: models, session management and directories."""
from nft_enrichment.db.models import Category, NftCategory, User

__all__ = ["Category", "NftCategory", "User"]
