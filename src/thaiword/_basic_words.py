"""Small built-in Thai vocabulary used when no dictionary is supplied."""

BASIC_WORDS: frozenset[str] = frozenset({
    # Greetings and politeness particles
    "สวัสดี", "ครับ", "ค่ะ", "ขอบคุณ",
    # Pronouns
    "ผม", "ฉัน", "คุณ", "เขา", "เธอ",
    # Everyday verbs
    "ไป", "มา", "กิน", "ดื่ม", "นอน", "ตื่น", "อาบน้ำ", "แปรงฟัน",
    # Adjectives
    "ดี", "เก่ง", "สวย", "หล่อ", "อร่อย", "เผ็ด", "หวาน", "เค็ม",
    # Demonstratives and locations
    "ที่", "นี่", "นั่น", "โน่น", "ใน", "บน", "ล่าง", "ข้าง",
})
