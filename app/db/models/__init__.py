from app.db.models.content import Content, ContentType

__all__ = ["Content", "ContentType"]
