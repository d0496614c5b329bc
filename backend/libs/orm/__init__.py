from libs.orm.base import ActiveMixin, BaseModel, Translations, translations_column

__all__ = ["ActiveMixin", "BaseModel", "Translations", "translations_column"]
