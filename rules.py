# rules.py
from __future__ import annotations
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple

REPAIR = "repair"
COMPLAINT = "complaint"
JOB_TYPES = (REPAIR, COMPLAINT)

REPAIR_OTHER = "อื่น ๆ"
COMPLAINT_OTHER = "งานร้องเรียนทั่วไป"

@dataclass(frozen=True)
class CategoryRule:
    category: str
    keywords: FrozenSet[str]

    def matches(self, text: str) -> bool:
        return any(kw in text for kw in self.keywords)

def _rule(category: str, *keywords: str) -> CategoryRule:
    return CategoryRule(category, frozenset(k.casefold() for k in keywords))

# --- repair: categories are raw repair_category values, so they roll up in groups.py ---
# order is policy: the first matching rule wins
REPAIR_RULES: Tuple[CategoryRule, ...] = (
    _rule("ลิฟต์", "ลิฟต์", "ลิฟท์", "บันไดเลื่อน", "lift", "elevator", "escalator"),
    _rule("เครื่องปรับอากาศ", "แอร์", "เครื่องปรับอากาศ", "คอมเพรสเซอร์", "aircon", "air con", "air-con"),
    _rule("แผงโซล่าเซล", "โซล่า", "โซลาร์", "อินเวอร์เตอร์", "solar", "inverter"),
    _rule("สระว่ายน้ำ", "สระว่ายน้ำ", "สระน้ำ", "swimming pool", "pool"),
    _rule("อุปกรณ์ฟิตเนส", "ฟิตเนส", "ลู่วิ่ง", "fitness", "treadmill", "gym"),
    _rule("แผ่นหลังคา", "หลังคา", "รางน้ำฝน", "roof", "gutter"),
    _rule("สุขภัณฑ์อื่น ๆ", "ชักโครก", "สุขภัณฑ์", "อ่างล้างหน้า", "สายชำระ", "ฝักบัว", "toilet", "shower", "wash basin"),
    _rule("ระบบประปา", "ประปา", "น้ำรั่ว", "น้ำซึม", "น้ำไม่ไหล", "ท่อ", "ก๊อก", "วาล์ว", "water", "pipe", "leak", "drain", "faucet"),
    _rule("ระบบไฟฟ้า", "ไฟฟ้า", "ไฟดับ", "ไฟไม่ติด", "ปลั๊ก", "สวิตช์", "สวิตซ์", "เบรกเกอร์", "หลอดไฟ", "electric", "breaker", "socket", "outlet"),
    _rule("ประตู/หน้าต่าง", "ประตู", "หน้าต่าง", "ลูกบิด", "บานเลื่อน", "door", "window"),
    _rule("ฝ้าและผนัง", "ฝ้า", "ผนัง", "ceiling", "wall"),
    _rule("พื้น", "พื้นห้อง", "พื้นร่อน", "ปูพื้น", "กระเบื้อง", "ลามิเนต", "floor", "tile"),
    _rule("โครงสร้าง", "โครงสร้าง", "คาน", "ร้าว", "บันได", "crack", "beam", "column", "stair"),
    _rule("งานตกแต่ง/งานสี", "ทาสี", "สีลอก", "สีหลุด", "สีซีด", "paint"),
    _rule("รั้ว/กำแพง", "รั้ว", "กำแพง", "fence"),
)

# --- complaint: project-level issues ---
COMPLAINT_RULES: Tuple[CategoryRule, ...] = (
    _rule("ระบบรักษาความปลอดภัย", "รปภ", "ขโมย", "กล้องวงจรปิด", "คีย์การ์ด", "security", "guard", "theft", "cctv", "keycard"),
    _rule("ความสะอาดและสุขาภิบาล", "ขยะ", "สกปรก", "กลิ่น", "ทำความสะอาด", "แมลง", "garbage", "trash", "dirty", "smell", "pest control"),
    _rule("ภูมิทัศน์", "ต้นไม้", "สนามหญ้า", "สวน", "ตัดหญ้า", "landscape", "garden", "lawn"),
    _rule("พื้นที่ส่วนกลาง", "ส่วนกลาง", "ที่จอดรถ", "จอดรถ", "คลับเฮาส์", "ล็อบบี้", "parking", "car park", "clubhouse", "lobby", "common area"),
)

_RULES = {REPAIR: REPAIR_RULES, COMPLAINT: COMPLAINT_RULES}
_FALLBACK = {REPAIR: REPAIR_OTHER, COMPLAINT: COMPLAINT_OTHER}


def _job_type(job_type: Optional[str]) -> str:
    jt = (job_type or "").strip().lower()
    return jt if jt in _RULES else REPAIR

def matching_rules(text: Optional[str], job_type: Optional[str]) -> List[str]:
    """Every category whose keywords hit, in rule order (first one is what categorize() picks)."""
    if not text or not text.strip():
        return []
    t = text.casefold()
    return [r.category for r in _RULES[_job_type(job_type)] if r.matches(t)]

def categorize(text: Optional[str], job_type: Optional[str]) -> str:
    """Classify free repair/complaint text. Always returns a label."""
    # empty text gets the generic repair bucket for every job type
    if not text or not text.strip():
        return REPAIR_OTHER
    jt = _job_type(job_type)
    t = text.casefold()
    for rule in _RULES[jt]:
        if rule.matches(t):
            return rule.category
    return _FALLBACK[jt]
