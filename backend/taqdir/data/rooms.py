"""Room complexity factors for finishing-cost adjustment.

A factor reflects how cost-intensive a space is to finish relative to a
plain room (1.0): kitchens and bathrooms carry fixtures, tiling and
plumbing density, while courtyards and parking are cheap to finish.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

ROOM_COMPLEXITY: Mapping[str, float] = MappingProxyType({
    # Basic rooms
    "غرف نوم الأطفال": 1.0,
    "غرفة الضيوف": 1.0,
    "مخزن": 0.8,
    "مدخل رئيسي": 0.9,
    # Standard complexity
    "صالة المعيشة": 1.2,
    "غرفة نوم رئيسية": 1.3,
    "غرفة الطعام": 1.1,
    "مكتب منزلي": 1.1,
    # High complexity
    "مطبخ رئيسي": 1.8,
    "حمام رئيسي": 1.6,
    "حمامات إضافية": 1.4,
    "مجلس الرجال": 1.4,
    "مجلس النساء": 1.4,
    # Utility and outdoor
    "غرفة الخادمة": 1.1,
    "غرفة الغسيل": 1.3,
    "فناء داخلي": 0.7,
    "حديقة خارجية": 0.6,
    "مواقف السيارات": 0.5,
    "ملحق خارجي": 0.8,
    "درج داخلي": 1.2,
    # Commercial
    "منطقة الاستقبال": 1.5,
    "صالات العرض": 1.3,
    "مكاتب إدارية": 1.2,
    "قاعات الاجتماعات": 1.4,
    "منطقة الخدمات": 1.1,
    "حمامات عامة": 1.6,
    "حمامات ذوي الاحتياجات الخاصة": 1.8,
    "مخارج الطوارئ": 1.0,
    "غرف التكييف": 2.0,
    "غرفة الكهرباء": 2.2,
    "منطقة التحميل": 0.8,
    "أنظمة الإنذار": 1.5,
    "كاميرات المراقبة": 1.3,
    "نظام مكافحة الحريق": 2.5,
    "مصاعد": 3.0,
    "سلالم الطوارئ": 1.2,
    "منطقة الأمن": 1.4,
    "مطعم/كافيتيريا": 1.8,
    "مسجد/مصلى": 1.3,
})

DEFAULT_ROOM_COMPLEXITY: float = 1.0

# Spaces whose presence signals a higher-end program.
LUXURY_INDICATORS: frozenset[str] = frozenset({
    "مجلس الرجال",
    "مجلس النساء",
    "فناء داخلي",
    "حديقة خارجية",
    "غرفة الخادمة",
    "ملحق خارجي",
    "مطعم/كافيتيريا",
    "مسجد/مصلى",
})

# Minimum space set assumed when a request lists no rooms (bedroom + hall).
DEFAULT_ROOM_TYPES: tuple[str, ...] = ("غرفة نوم", "صالة")
