# app/helpers/messages.py
"""
User-facing messages returned by the API.
Clinical text is Persian/Dari, infrastructure errors stay in English.
"""

UNAUTHORIZED = "دسترسی غیرمجاز"
ADMIN_REQUIRED = "دسترسی مدیر الزامی است"
DB_UNAVAILABLE = "Database connection is currently unavailable. Please try again later."
INVALID_DATA_FORMAT = "خطا در قالب داده‌ها. لطفاً مطمئن شوید که اطلاعات به درستی وارد شده‌اند."

# Prescriptions
PATIENT_NAME_REQUIRED = "نام بیمار الزامی است"
DIAGNOSIS_REQUIRED = "تشخیص الزامی است"
PRESCRIPTION_ID_REQUIRED = "شناسه نسخه الزامی است"
PRESCRIPTION_NOT_FOUND = "نسخه یافت نشد"
PRESCRIPTION_CREATED = "نسخه با موفقیت ایجاد شد"
PRESCRIPTION_UPDATED = "نسخه با موفقیت به‌روزرسانی شد"
PRESCRIPTION_DELETED = "نسخه با موفقیت حذف شد"
FETCH_FAILED = "خطا در دریافت نسخه‌ها"
CREATE_FAILED = "خطا در ایجاد نسخه"
UPDATE_FAILED = "خطا در به‌روزرسانی نسخه"
DELETE_FAILED = "خطا در حذف نسخه"
PDF_FAILED = "خطا در ایجاد فایل PDF"
PDF_CONFIG_INVALID = "تنظیمات PDF نامعتبر است"

# AI suggestions
SYMPTOMS_HISTORY_REQUIRED = "شرح حال بیمار الزامی است"
SYMPTOMS_REQUIRED = "علائم بیمار الزامی است"
ANALYSIS_FAILED = "خطا در تحلیل علائم"
TEXT_TOO_SHORT = "Text too short"
TEXT_TOO_SHORT_FOR_PRESCRIPTION = "Text too short for prescription generation"
SUGGEST_FAILED = "Failed to generate prescription"

# Presets
PRESET_NOT_FOUND = "Preset not found"
PRESET_FIELDS_REQUIRED = "Name, diagnosis, and category are required"
PRESET_READ_ONLY_EDIT = "Cannot edit predefined presets"
PRESET_READ_ONLY_DELETE = "Cannot delete predefined presets"
PRESET_DELETED = "Preset deleted successfully"
PRESETS_LOAD_FAILED = "Failed to load preset prescriptions"
PRESET_FETCH_FAILED = "Failed to fetch preset"
PRESET_UPDATE_FAILED = "Failed to update preset"
PRESET_CREATE_FAILED = "Failed to create preset"
PRESET_DELETE_FAILED = "Failed to delete preset"

# Validation
INPUT_EMPTY = "لطفاً علائم بیمار یا متن نسخه را وارد کنید"
INPUT_TOO_SHORT = "متن وارد شده بسیار کوتاه است"
MISSING_FIELDS = "فیلدهای ضروری وجود ندارد: {fields}"
NO_MEDICINES = "نسخه باید حداقل یک دارو داشته باشد"
INCOMPLETE_MEDICINE = "اطلاعات ناقص برای دارو: {fields}"
