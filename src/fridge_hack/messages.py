# Display strings are fixed to the Thai locale.

EMPTY_INGREDIENTS = "กรุณาเพิ่มวัตถุดิบอย่างน้อย 1 อย่าง"
RECIPE_GENERATION_FAILED = "ไม่สามารถสร้างสูตรอาหารได้ โปรดลองอีกครั้ง"
MISSING_API_KEY = "ยังไม่ได้ตั้งค่า API Key กรุณาตั้งค่า GOOGLE_API_KEY ก่อนใช้งาน"

VIDEO_PREPARING = "กำลังเตรียมห้องครัวเสมือนจริง..."
VIDEO_PROGRESS_PHRASES = (
    "เชฟกำลังจัดเตรียมวัตถุดิบ...",
    "กำลังตั้งกระทะและอุ่นเครื่อง...",
    "กลิ่นหอมเริ่มโชยออกมาแล้ว...",
    "อีกนิดเดียว เมนูของคุณจะพร้อมแสดงผล...",
)
VIDEO_BILLING_KEY_REQUIRED = "กรุณาเลือก API Key ที่เปิดใช้งาน Billing แล้วอีกครั้ง"
VIDEO_UNAVAILABLE = "ไม่สามารถสร้างวิดีโอได้ในขณะนี้"

RECIPE_PROMPT = (
    "จากวัตถุดิบต่อไปนี้ ช่วยสร้างสรรค์สูตรอาหาร {count} เมนูที่ไม่ซ้ำใคร วัตถุดิบ: {ingredients}. \n"
    "สำหรับแต่ละเมนู ให้ระบุวิธีทำทีละขั้นตอนแบบละเอียด (Detailed step-by-step instructions), "
    "imagePrompt (ภาษาอังกฤษ) สำหรับวาดรูปอาหารที่จัดจานสวยงาม "
    "และ videoPrompt (ภาษาอังกฤษ) สำหรับทำวิดีโอขั้นตอนการทำสั้นๆ\n\n"
    "{format_instructions}"
)
IMAGE_PROMPT = (
    "A high-quality, professional food photography of {prompt}, "
    "studio lighting, appetizing, cinematic."
)
VIDEO_PROMPT = "Cinematic close-up of cooking {prompt}, steam rising, vibrant colors, 4k."
