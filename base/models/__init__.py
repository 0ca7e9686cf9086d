# base/models/__init__.py

# ملاحظة: احرص على ترتيب الاستيرادات بحيث لا تُسبب دوران.
# ال Mixins تبقى غير مُصدرة لأنها abstract.
from .user import User
from .company import Company

__all__ = [
    "User",
    "Company",
]
