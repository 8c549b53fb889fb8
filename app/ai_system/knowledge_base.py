# app/ai_system/knowledge_base.py

"""
Static Clinical Lookup Tables
Keyword dictionaries behind every suggestion endpoint. They answer on their
own when the inference API is disabled or fails.
Clinical text is Persian/Dari; medicine names and dosages stay in English.
"""
from dataclasses import dataclass
from typing import Dict, List


@dataclass
class VitalSignRanges:
    """Typical vitals for a condition, pre-filled into a draft prescription"""
    pulse_rate: str
    blood_pressure: str
    temperature: str
    respiratory_rate: str
    oxygen_saturation: str


@dataclass
class ConditionProfile:
    """A diagnosis the draft generator can recognise from free text"""
    name: str
    keywords: List[str]
    severity: str  # "mild", "moderate" or "severe"
    vital_signs: VitalSignRanges


# ============================================================================
# SYMPTOM ANALYSIS
# ============================================================================

# Keyword → diagnosis used to read a diagnosis out of generated text
DIAGNOSIS_KEYWORDS: Dict[str, str] = {
    "سرفه": "عفونت تنفسی",
    "تب": "عفونت ویروسی",
    "گلودرد": "فارنژیت",
    "سردرد": "سردرد تنشی",
    "درد معده": "گاستریت",
    "اسهال": "گاستروانتریت",
}
UNKNOWN_DIAGNOSIS = "نیازمند ارزیابی بیشتر"

# Local analysis patterns, first match wins
LOCAL_ANALYSIS_RULES: List[Dict] = [
    {
        "keywords": ["سرفه", "cough"],
        "diagnosis": "عفونت تنفسی فوقانی",
        "recommendations": [
            "بررسی ریه و مجاری تنفسی",
            "آزمایش خون و عکس قفسه سینه در صورت نیاز",
            "استراحت و مصرف مایعات فراوان",
        ],
    },
    {
        "keywords": ["تب", "fever"],
        "diagnosis": "سندرم تب‌دار",
        "recommendations": [
            "کنترل دمای بدن",
            "بررسی علل عفونی",
            "آزمایش‌های اولیه در صورت نیاز",
        ],
    },
    {
        "keywords": ["سردرد", "headache"],
        "diagnosis": "سردرد تنشی",
        "recommendations": [
            "بررسی علل ثانویه سردرد",
            "کنترل فشار خون",
            "در صورت تداوم، سی‌تی‌اسکن مغز",
        ],
    },
    {
        "keywords": ["درد معده", "stomach pain"],
        "diagnosis": "گاستریت یا سوءهاضمه",
        "recommendations": [
            "معاینه شکم",
            "آزمایش هلیکوباکتر در صورت نیاز",
            "رژیم غذایی مناسب",
        ],
    },
]
LOCAL_DEFAULT_DIAGNOSIS = "نیازمند معاینه حضوری"
LOCAL_DEFAULT_RECOMMENDATIONS = [
    "Complete physical examination",
    "Monitor vital signs",
    "Paraclinical tests if needed",
]
LOCAL_WARNINGS = [
    "This is a basic analysis and does not replace medical examination",
    "Seek immediate medical attention if symptoms worsen",
]


# ============================================================================
# MEDICATION SUGGESTIONS (by diagnosis or symptom keyword)
# ============================================================================

DIAGNOSIS_MEDICATIONS: Dict[str, List[Dict]] = {
    "عفونت تنفسی": [
        {"medicine": "Amoxicillin", "dosage": "500 mg", "form": "capsule", "frequency": "هر ۸ ساعت",
         "duration": "۷ روز", "route": "oral", "timing": "after_meal", "withFood": True,
         "instructions": "قبل از غذا مصرف شود", "notes": "آنتی بیوتیک وسیع الطیف"},
        {"medicine": "Acetaminophen", "dosage": "500 mg", "form": "tablet", "frequency": "هر ۶ ساعت در صورت نیاز",
         "duration": "۳ روز", "route": "oral", "timing": "after_meal", "withFood": False,
         "instructions": "برای تب و درد", "notes": "حداکثر ۴ عدد در روز"},
    ],
    "سرفه": [
        {"medicine": "Dextromethorphan", "dosage": "15 mg", "form": "syrup", "frequency": "هر ۴ ساعت",
         "duration": "۵ روز", "route": "oral", "timing": "after_meal", "withFood": False,
         "instructions": "برای سرفه خشک", "notes": "قبل از خواب مصرف شود"},
    ],
    "فارنژیت": [
        {"medicine": "Penicillin V", "dosage": "500 mg", "form": "tablet", "frequency": "هر ۶ ساعت",
         "duration": "۱۰ روز", "route": "oral", "timing": "before_meal", "withFood": False,
         "instructions": "نیم ساعت قبل از غذا", "notes": "برای عفونت استرپتوکوکی"},
    ],
    "سردرد": [
        {"medicine": "Ibuprofen", "dosage": "400 mg", "form": "tablet", "frequency": "هر ۸ ساعت",
         "duration": "۳ روز", "route": "oral", "timing": "after_meal", "withFood": True,
         "instructions": "با غذا مصرف شود", "notes": "برای سردرد و التهاب"},
    ],
    "گاستریت": [
        {"medicine": "Omeprazole", "dosage": "20 mg", "form": "capsule", "frequency": "صبح ناشتا",
         "duration": "۱۴ روز", "route": "oral", "timing": "before_meal", "withFood": False,
         "instructions": "نیم ساعت قبل از صبحانه", "notes": "کاهنده اسید معده"},
    ],
    "تب": [
        {"medicine": "Acetaminophen", "dosage": "500 mg", "form": "tablet", "frequency": "هر ۶ ساعت در صورت نیاز",
         "duration": "تا بهبودی", "route": "oral", "timing": "after_meal", "withFood": False,
         "instructions": "برای کاهش تب", "notes": "حداکثر ۴ عدد در روز"},
    ],
}

GENERAL_MEDICATIONS: List[Dict] = [
    {"id": "general_1", "medicine": "Acetaminophen", "dosage": "500 mg", "form": "tablet",
     "frequency": "هر ۶ ساعت در صورت نیاز", "duration": "۳ روز", "route": "oral", "timing": "after_meal",
     "withFood": False, "instructions": "برای درد و تب", "notes": "حداکثر ۴ عدد در روز"},
    {"id": "general_2", "medicine": "Vitamin C", "dosage": "500 mg", "form": "tablet",
     "frequency": "روزانه", "duration": "۷ روز", "route": "oral", "timing": "after_meal",
     "withFood": True, "instructions": "تقویت سیستم ایمنی", "notes": "بعد از غذا مصرف شود"},
]


# ============================================================================
# AUTOCOMPLETE
# ============================================================================

SYMPTOM_COMPLETIONS: Dict[str, List[str]] = {
    "سرفه": ["سرفه خشک", "سرفه خلط دار", "سرفه شدید", "سرفه شبانه", "سرفه مداوم"],
    "تب": ["تب بالا", "تب خفیف", "تب مداوم", "تب با لرز", "تب شبانه"],
    "گلودرد": ["گلودرد شدید", "گلودرد خفیف", "گلودرد با مشکل در بلع", "گلودرد با تورم لوزه"],
    "سردرد": ["سردرد میگرنی", "سردرد تنشی", "سردرد شدید", "سردرد مداوم", "سردرد با سرگیجه"],
    "بدن": ["بدن درد", "ضعف بدن", "خستگی بدن", "کوفتگی بدن"],
    "معده": ["درد معده", "حالت تهوع", "استفراغ", "سوء هاضمه"],
    "بینی": ["آبریزش بینی", "گرفتگی بینی", "خارش بینی", "عطسه"],
    "درد": ["درد شدید", "درد مبهم", "درد تیز", "درد ضربان دار"],
    "تنفس": ["تنگی نفس", "سختی تنفس", "تنفس سریع", "خس خس سینه"],
}

GENERAL_COMPLETIONS: List[str] = [
    "تب بالا",
    "سرفه خشک",
    "گلودرد شدید",
    "بدن درد",
    "آبریزش بینی",
    "سردرد مداوم",
    "ضعف عمومی",
    "حالت تهوع",
    "سرگیجه",
    "بی‌اشتهایی",
]

DEFAULT_COMPLETIONS: List[str] = ["سرفه خشک", "تب بالا", "گلودرد شدید", "بدن درد", "آبریزش بینی"]


# ============================================================================
# DRAFT PRESCRIPTION GENERATOR
# ============================================================================

CONDITIONS: List[ConditionProfile] = [
    ConditionProfile(
        name="برونشیت حاد",
        keywords=["سرفه", "خلط", "سینه", "ریه", "برونشیت"],
        severity="moderate",
        vital_signs=VitalSignRanges("80-90", "120/80", "37.5-38.5", "18-22", "95-98%"),
    ),
    ConditionProfile(
        name="فارنژیت استرپتوکوکی",
        keywords=["گلودرد", "بلع", "لوزه", "حلق", "سفید"],
        severity="moderate",
        vital_signs=VitalSignRanges("85-95", "120/80", "38.0-39.0", "16-20", "97-99%"),
    ),
    ConditionProfile(
        name="سینوزیت حاد",
        keywords=["سینوس", "صورت", "بینى", "سردرد", "احتقان"],
        severity="mild",
        vital_signs=VitalSignRanges("70-80", "110/70", "37.0-37.8", "16-18", "98-100%"),
    ),
    ConditionProfile(
        name="عفونت ادراری",
        keywords=["ادرار", "سوزش", "تکرر", "کلیه", "مثانه"],
        severity="moderate",
        vital_signs=VitalSignRanges("75-85", "115/75", "37.5-38.5", "16-20", "97-99%"),
    ),
    ConditionProfile(
        name="میگرن",
        keywords=["سردرد", "میگرن", "ضربان", "تهوع", "نور"],
        severity="moderate",
        vital_signs=VitalSignRanges("70-80", "110/70", "36.5-37.0", "14-16", "98-100%"),
    ),
    ConditionProfile(
        name="رینیت آلرژیک",
        keywords=["آلرژی", "عطسه", "خارش", "آبریزش", "حساسیت"],
        severity="mild",
        vital_signs=VitalSignRanges("65-75", "110/70", "36.5-37.0", "16-18", "98-100%"),
    ),
]

DEFAULT_CONDITION = ConditionProfile(
    name="عفونت تنفسی فوقانی",
    keywords=[],
    severity="mild",
    vital_signs=VitalSignRanges("72-80", "120/80", "36.8-37.2", "16-20", "98%"),
)

CONDITION_MEDICATIONS: Dict[str, List[Dict]] = {
    "برونشیت حاد": [
        {"medicine": "Amoxicillin", "dosage": "500 mg", "form": "capsule", "frequency": "هر ۸ ساعت",
         "duration": "۷ روز", "route": "oral", "instructions": "قبل از غذا مصرف شود", "notes": "آنتی بیوتیک وسیع الطیف"},
        {"medicine": "Bromhexine", "dosage": "8 mg", "form": "tablet", "frequency": "هر ۸ ساعت",
         "duration": "۵ روز", "route": "oral", "instructions": "بعد از غذا", "notes": "اکسپکتورانت"},
        {"medicine": "Acetaminophen", "dosage": "500 mg", "form": "tablet", "frequency": "هر ۶ ساعت در صورت نیاز",
         "duration": "۳ روز", "route": "oral", "instructions": "برای تب و درد", "notes": "حداکثر ۴ عدد در روز"},
    ],
    "فارنژیت استرپتوکوکی": [
        {"medicine": "Penicillin V", "dosage": "500 mg", "form": "tablet", "frequency": "هر ۶ ساعت",
         "duration": "۱۰ روز", "route": "oral", "instructions": "نیم ساعت قبل از غذا", "notes": "برای عفونت استرپتوکوکی"},
        {"medicine": "Ibuprofen", "dosage": "400 mg", "form": "tablet", "frequency": "هر ۸ ساعت",
         "duration": "۵ روز", "route": "oral", "instructions": "با غذا مصرف شود", "notes": "برای درد و التهاب"},
    ],
    "سینوزیت حاد": [
        {"medicine": "Amoxicillin-Clavulanate", "dosage": "625 mg", "form": "tablet", "frequency": "هر ۱۲ ساعت",
         "duration": "۷ روز", "route": "oral", "instructions": "با غذا", "notes": "آنتی بیوتیک"},
        {"medicine": "Pseudoephedrine", "dosage": "60 mg", "form": "tablet", "frequency": "هر ۱۲ ساعت",
         "duration": "۵ روز", "route": "oral", "instructions": "صبح و عصر", "notes": "دکونژستان"},
        {"medicine": "Cetirizine", "dosage": "10 mg", "form": "tablet", "frequency": "روزی یکبار",
         "duration": "۷ روز", "route": "oral", "instructions": "شبها قبل خواب", "notes": "آنتی هیستامین"},
    ],
    "عفونت ادراری": [
        {"medicine": "Ciprofloxacin", "dosage": "500 mg", "form": "tablet", "frequency": "هر ۱۲ ساعت",
         "duration": "۷ روز", "route": "oral", "instructions": "با معده خالی", "notes": "آنتی بیوتیک"},
        {"medicine": "Phenazopyridine", "dosage": "200 mg", "form": "tablet", "frequency": "هر ۸ ساعت",
         "duration": "۲ روز", "route": "oral", "instructions": "بعد از غذا", "notes": "برای سوزش ادرار"},
    ],
    "میگرن": [
        {"medicine": "Sumatriptan", "dosage": "50 mg", "form": "tablet", "frequency": "در شروع حمله",
         "duration": "طبق نیاز", "route": "oral", "instructions": "در شروع سردرد مصرف شود", "notes": "حداکثر ۲ عدد در روز"},
        {"medicine": "Ibuprofen", "dosage": "400 mg", "form": "tablet", "frequency": "هر ۶ ساعت در صورت نیاز",
         "duration": "۳ روز", "route": "oral", "instructions": "با غذا", "notes": "برای درد"},
        {"medicine": "Metoclopramide", "dosage": "10 mg", "form": "tablet", "frequency": "هر ۸ ساعت در صورت تهوع",
         "duration": "۲ روز", "route": "oral", "instructions": "قبل از غذا", "notes": "برای تهوع و استفراغ"},
    ],
    "رینیت آلرژیک": [
        {"medicine": "Loratadine", "dosage": "10 mg", "form": "tablet", "frequency": "روزی یکبار",
         "duration": "۱۴ روز", "route": "oral", "instructions": "صبحها", "notes": "آنتی هیستامین غیر خواب آور"},
        {"medicine": "Fluticasone", "dosage": "50 mcg", "form": "spray", "frequency": "هر سوراخ بینی دو پاف روزی دو بار",
         "duration": "۳۰ روز", "route": "nasal", "instructions": "صبح و شب", "notes": "اسپری بینی"},
        {"medicine": "Montelukast", "dosage": "10 mg", "form": "tablet", "frequency": "روزی یکبار",
         "duration": "۳۰ روز", "route": "oral", "instructions": "شبها قبل خواب", "notes": "برای آلرژی"},
    ],
    "عفونت تنفسی فوقانی": [
        {"medicine": "Amoxicillin", "dosage": "500 mg", "form": "capsule", "frequency": "هر ۸ ساعت",
         "duration": "۷ روز", "route": "oral", "instructions": "قبل از غذا", "notes": "آنتی بیوتیک"},
        {"medicine": "Acetaminophen", "dosage": "500 mg", "form": "tablet", "frequency": "هر ۶ ساعت در صورت نیاز",
         "duration": "۳ روز", "route": "oral", "instructions": "برای تب و درد", "notes": "حداکثر ۴ عدد در روز"},
        {"medicine": "Chlorpheniramine", "dosage": "4 mg", "form": "tablet", "frequency": "هر ۸ ساعت",
         "duration": "۵ روز", "route": "oral", "instructions": "برای کاهش عطسه و آبریزش",
         "notes": "ممکن است باعث خواب آلودگی شود"},
    ],
}

PHYSICAL_EXAM_FINDINGS: Dict[str, str] = {
    "برونشیت حاد": "رال خشک در قاعده ریه راست، سرفه‌های خلط دار",
    "فارنژیت استرپتوکوکی": "حلق قرمز و متورم، تورم لوزه‌ها، ندولر لنفاوی گردنی حساس",
    "سینوزیت حاد": "حساسیت در سینوس‌های فکی و پیشانی، ترشح پشت حلق",
    "عفونت ادراری": "حساسیت خفیف در ناحیه سوپراپوبیک، بدون ادم",
    "میگرن": "فشار خون نرمال، عدم وجود علائم عصبی کانونی",
    "رینیت آلرژیک": "پلان بینی، حلقه‌های تیره زیر چشم، مخاط بینی رنگ پریده",
}
DEFAULT_PHYSICAL_EXAM = "وضعیت عمومی قابل قبول، علائم حیاتی پایدار"

CARE_INSTRUCTIONS: Dict[str, str] = {
    "برونشیت حاد": "استراحت کافی، مصرف مایعات گرم، اجتناب از هوای سرد",
    "فارنژیت استرپتوکوکی": "غرغره آب نمک، مصرف مایعات فراوان، پرهیز از غذاهای تند",
    "سینوزیت حاد": "شستشوی بینی با سرم نمکی، مصرف مایعات گرم",
    "عفونت ادراری": "مصرف زیاد مایعات، پرهیز از کافئین",
    "میگرن": "استراحت در محیط تاریک و ساکت، پرهیز از محرک‌های غذایی",
    "رینیت آلرژیک": "اجتناب از عوامل آلرژن، شستشوی بینی",
}
DEFAULT_CARE_INSTRUCTIONS = "استراحت کافی و مصرف منظم داروها"

ACTIVITY_RESTRICTIONS: Dict[str, str] = {
    "برونشیت حاد": "پرهیز از سیگار و هوای آلوده، محدودیت فعالیت بدنی شدید",
    "فارنژیت استرپتوکوکی": "پرهیز از غذاهای تند و داغ، محدودیت صحبت کردن",
    "میگرن": "پرهیز از پنیر کهنه، شکلات، قهوه و استرس",
    "عفونت ادراری": "پرهیز از رابطه جنسی تا پایان درمان، محدودیت فعالیت شدید",
}
DEFAULT_ACTIVITY_RESTRICTIONS = "فعالیت سبک، پرهیز از سرما"

# (all keywords that must appear, chief complaint); checked in order
CHIEF_COMPLAINT_RULES: List[tuple] = [
    (("سرفه", "تب"), "سرفه خلط دار، تب و بدن درد"),
    (("گلودرد", "بلع"), "گلودرد شدید و مشکل در بلع"),
    (("سینوس",), "احتقان بینی، سردرد و فشار صورت"),
    (("صورت",), "احتقان بینی، سردرد و فشار صورت"),
    (("ادرار",), "سوزش ادرار و تکرر ادرار"),
    (("سوزش",), "سوزش ادرار و تکرر ادرار"),
    (("سردرد", "ضربان"), "سردرد ضربان دار و تهوع"),
    (("آلرژی",), "عطسه، آبریزش بینی و خارش چشم"),
    (("عطسه",), "عطسه، آبریزش بینی و خارش چشم"),
]
DEFAULT_CHIEF_COMPLAINT = "علائم عمومی سرماخوردگی"
DEFAULT_DIFFERENTIAL = "سرماخوردگی معمولی، آلرژی، سینوزیت"

FOLLOW_UP_URGENT = "در صورت عدم بهبود پس از ۴۸ ساعت یا تشدید علائم مراجعه شود"
FOLLOW_UP_ROUTINE = "در صورت عدم بهبود پس از ۳ روز مراجعه شود"

HISTORY_TEMPLATE = (
    "بیمار با شکایت {chief_complaint} مراجعه نموده است. "
    "شروع علائم از ۲-۳ روز گذشته بوده و به تدریج تشدید یافته است."
)

DRAFT_DOCTOR_NAME = "دکتر احمدی"
DRAFT_CLINIC_NAME = "کلینیک تخصصی"


# ============================================================================
# FREE-TEXT MEDICAL ANALYSIS (local knowledge)
# ============================================================================

ENGLISH_SYMPTOM_CONDITIONS: Dict[str, str] = {
    "dry cough": "Acute bronchitis, asthma, allergy",
    "productive cough": "Bronchitis, pneumonia, respiratory infection",
    "high fever": "Bacterial infection, influenza, COVID-19",
    "sore throat": "Pharyngitis, tonsillitis, streptococcus",
    "severe headache": "Migraine, sinusitis, hypertension",
    "chest pain": "Cardiac, pulmonary, gastrointestinal problems",
    "shortness of breath": "Asthma, COPD, anxiety, cardiac problems",
}

# (trigger keywords, examinations to add)
EXAMINATION_RULES: List[tuple] = [
    (("سرفه", "تنگی نفس"), ["Lung examination", "Chest X-ray if needed"]),
    (("تب", "بدن درد"), ["Blood test", "Sputum culture if cough"]),
    (("سردرد", "سرگیجه"), ["Neurological examination", "Blood pressure measurement"]),
]

GENERAL_ADVICE: List[str] = [
    "استراحت کافی",
    "مصرف مایعات فراوان",
    "پایش علائم حیاتی",
    "مراجعه به پزشک در صورت تشدید علائم",
]


# ============================================================================
# STATIC FALLBACK WHEN PRESCRIPTION GENERATION FAILS
# ============================================================================

EMERGENCY_FALLBACK_PRESCRIPTION: Dict = {
    "diagnosis": "نیازمند ارزیابی پزشک",
    "confidence": "low",
    "clinicalNotes": "سیستم موقتاً در دسترس نیست. لطفاً با پزشک مشورت کنید.",
    "medications": [],
    "recommendations": ["مراجعه به پزشک"],
    "warnings": ["این یک پاسخ موقتی است"],
}
