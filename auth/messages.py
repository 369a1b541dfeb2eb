"""
auth/messages.py -- Thai user-facing strings for the login view.

Route handlers and flows never build message text inline; they look it up
here so the wording stays in one place.
"""

# Form copy
TITLE = "เข้าสู่ระบบ"
SUBTITLE = "กรุณาเข้าสู่ระบบเพื่อใช้งานระบบบริหารจัดการคลังสินค้า"
IDENTIFIER_LABEL = "อีเมลหรือเบอร์โทรศัพท์"
PASSWORD_LABEL = "รหัสผ่าน"
PASSWORD_PLACEHOLDER = "กรุณากรอกรหัสผ่าน"
REMEMBER_ME = "จดจำการเข้าสู่ระบบ"
SUBMIT = "เข้าสู่ระบบ"
SUBMIT_LOADING = "กำลังเข้าสู่ระบบ..."
LOGOUT = "ออกจากระบบ"

# Submit outcomes
FIELDS_REQUIRED = "กรุณากรอกข้อมูลให้ครบถ้วน"
CANNOT_LOGIN = "ไม่สามารถเข้าสู่ระบบได้ กรุณาลองใหม่"
LOGIN_FAILED = "เกิดข้อผิดพลาดในการเข้าสู่ระบบ"
VERIFY_EMAIL = "กรุณายืนยันอีเมลของคุณก่อนเข้าสู่ระบบ"
LOGIN_SUCCESS = "เข้าสู่ระบบสำเร็จ! กำลังเปลี่ยนหน้า..."

# Coded errors
USER_NOT_FOUND = "ไม่พบผู้ใช้งาน กรุณาตรวจสอบอีเมลหรือเบอร์โทรศัพท์"
WRONG_PASSWORD = "รหัสผ่านไม่ถูกต้อง กรุณาตรวจสอบอีกครั้ง"
INVALID_EMAIL = "รูปแบบอีเมลไม่ถูกต้อง"
USER_DISABLED = "บัญชีผู้ใช้ถูกปิดใช้งาน กรุณาติดต่อผู้ดูแลระบบ"
TOO_MANY_REQUESTS = "คำขอเข้าสู่ระบบมากเกินไป กรุณารอสักครู่แล้วลองใหม่"
UNEXPECTED_ERROR = "เกิดข้อผิดพลาดในการเข้าสู่ระบบ กรุณาลองใหม่อีกครั้ง"
