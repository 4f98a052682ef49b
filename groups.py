# groups.py
from __future__ import annotations
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
import logging

logger = logging.getLogger(__name__)

DEFAULT_GROUP = "อื่นๆ"

# group label -> raw repair_category values reported by the operations systems
CATEGORY_GROUP_MAP: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "ฝ้าและผนัง": ("ฝ้าและผนัง", "ผนัง", "ฝ้า"),
    "ประตู/หน้าต่าง": ("ประตู", "ประตู/หน้าต่าง", "หน้าต่าง", "ประตูอัตโนมัติ", "ลูกบิด"),
    "ระบบประปา": ("ระบบประปา", "ระบบน้ำ/ห้องน้ำ", "ท่อระบายน้ำ", "ก๊อกน้ำ", "วาล์วน้ำ เปิด-ปิด"),
    "สุขภัณฑ์": ("ชักโครก", "ฝาชักโครก", "อ่างล้างหน้า", "สุขภัณฑ์อื่น ๆ", "สายชำระ", "ฝักบัว"),
    "พื้น": ("วัสดุปูพื้น", "งานพื้น", "พื้น"),
    "งานถนน": ("พื้นถนน", "ทางเดินเท้า", "ไฟทางเดิน", "ไฟริมถนน"),
    "ระบบไฟฟ้า": ("ระบบไฟฟ้า", "ดวงโคม", "สวิตซ์", "เครื่องใช้ไฟฟ้า"),
    "โครงสร้าง": ("โครงสร้าง", "บันได", "บันไดหนีไฟ", "ฐานราก", "คาน", "เสา", "ผนังรับน้ำหนัก"),
    "หลังคา": ("โครงหลังคา", "หลังคาทางเดิน", "แผ่นหลังคา", "รางน้ำฝน"),
    "งานตกแต่ง/สี": ("งานตกแต่ง/งานสี", "วัสดุตกแต่ง/สี"),
    "เฟอร์นิเจอร์": ("เฟอร์นิเจอร์", "โซฟา"),
    "รั้ว/กำแพง": ("รั้ว/กำแพง",),
    "เครื่องปรับอากาศ": ("เครื่องปรับอากาศ",),
    "โซล่าเซลล์": ("Inverter", "แผงโซล่าเซล"),
    "งานติดตั้ง": ("งานติดตั้ง", "อุปกรณ์เครื่องใช้ภายในบ้าน"),
    "สระว่ายน้ำ": ("สระว่ายน้ำ",),
    "ลิฟต์": ("ลิฟต์",),
    "ฟิตเนส": ("อุปกรณ์ฟิตเนส",),
    DEFAULT_GROUP: ("อื่น ๆ", "อื่นๆ", "ถังขยะ"),
})


def build_group_lookup(table: Mapping[str, Iterable[str]]) -> Mapping[str, str]:
    """Invert group -> raw categories. A raw category listed under two groups
    belongs to the one iterated last."""
    out: Dict[str, str] = {}
    for group, categories in table.items():
        for cat in categories:
            if cat in out and out[cat] != group:
                logger.debug(f"Raw category {cat!r} moves from group {out[cat]!r} to {group!r}")
            out[cat] = group
    return MappingProxyType(out)

CATEGORY_TO_GROUP = build_group_lookup(CATEGORY_GROUP_MAP)


def group_of(raw_category: Optional[str], lookup: Mapping[str, str] = CATEGORY_TO_GROUP) -> str:
    if not raw_category:
        return DEFAULT_GROUP
    return lookup.get(raw_category, DEFAULT_GROUP)

def raw_categories_for(group: str, table: Mapping[str, Sequence[str]] = CATEGORY_GROUP_MAP) -> Tuple[str, ...]:
    """Raw values to filter on for a group; an unknown label is taken as a raw value itself."""
    return tuple(table.get(group) or (group,))

def summarize_groups(rows: Iterable[Mapping[str, Any]],
                     lookup: Mapping[str, str] = CATEGORY_TO_GROUP) -> List[Dict[str, Any]]:
    """
    Roll (category, total_jobs, open_jobs) rows up to groups.
    Sorted by total jobs, largest first, with the catch-all group always last.
    """
    totals: Dict[str, int] = {}
    opened: Dict[str, int] = {}
    for r in rows:
        group = group_of(r.get("category"), lookup)
        totals[group] = totals.get(group, 0) + int(r.get("total_jobs") or 0)
        opened[group] = opened.get(group, 0) + int(r.get("open_jobs") or 0)

    out = [{"group": g, "total_jobs": t, "open_jobs": opened.get(g, 0)} for g, t in totals.items()]
    out.sort(key=lambda x: (x["group"] == DEFAULT_GROUP, -x["total_jobs"]))
    return out
