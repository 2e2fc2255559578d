from fixture_insights.db.models.provider_type import ProviderType

__all__ = [
    "ProviderType",
]
