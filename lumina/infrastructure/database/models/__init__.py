# Importing every model registers its table on BaseModel.metadata
from lumina.infrastructure.database.models.user_model import UserModel
from lumina.infrastructure.database.models.product_model import ProductModel
from lumina.infrastructure.database.models.message_model import MessageModel
from lumina.infrastructure.database.models.notification_model import NotificationModel

__all__ = ["UserModel", "ProductModel", "MessageModel", "NotificationModel"]
