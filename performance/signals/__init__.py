# performance/signals/__init__.py
# تحميل المستقبِلات (receivers) عند استيراد الحزمة من PerformanceConfig.ready()
from . import ownership, participants  # noqa: F401
