# app/system_services/predefined_presets.py
"""
Read-only prescription templates shipped with the service.
User presets live in the prescriptions table under ``user_`` ids.
"""
from typing import Dict

from app.helpers.time import iso_timestamp

PREDEFINED_PRESETS: Dict[str, Dict] = {
    "common_cold": {
        "name": "سرماخوردگی",
        "category": "respiratory",
        "urgency": "low",
        "patient_info": {"name": "بیمار سرماخورده", "age": 35, "gender": "مرد"},
        "diagnosis": "سرماخوردگی ویروسی",
        "chief_complaint": "آبریزش بینی، عطسه و گلودرد خفیف",
        "history_of_present_illness": "بیمار با علائم سرماخوردگی از ۲ روز قبل مراجعه نموده است",
        "physical_examination": "حلق کمی قرمز، عدم تورم لوزه‌ها",
        "medicines": [
            {"id": "1", "medicine": "Chlorpheniramine", "dosage": "4 mg", "form": "tablet",
             "frequency": "هر ۸ ساعت", "duration": "۵ روز", "route": "oral",
             "instructions": "برای کاهش عطسه و آبریزش", "notes": "ممکن است باعث خواب آلودگی شود"},
            {"id": "2", "medicine": "Acetaminophen", "dosage": "500 mg", "form": "tablet",
             "frequency": "هر ۶ ساعت در صورت نیاز", "duration": "۳ روز", "route": "oral",
             "instructions": "برای تب و بدن درد", "notes": ""},
        ],
        "instructions": "استراحت و مصرف مایعات گرم",
        "follow_up": "در صورت عدم بهبود پس از ۳ روز مراجعه شود",
    },
    "strep_throat": {
        "name": "گلودرد چرکی",
        "category": "respiratory",
        "urgency": "medium",
        "patient_info": {"name": "بیمار گلودرد", "age": 22, "gender": "زن"},
        "diagnosis": "فارنژیت استرپتوکوکی",
        "chief_complaint": "گلودرد شدید و مشکل در بلع",
        "history_of_present_illness": "گلودرد و تب از ۳ روز قبل، بدون سرفه",
        "physical_examination": "حلق قرمز و متورم، تورم لوزه‌ها، ندولر لنفاوی گردنی حساس",
        "medicines": [
            {"id": "1", "medicine": "Penicillin V", "dosage": "500 mg", "form": "tablet",
             "frequency": "هر ۶ ساعت", "duration": "۱۰ روز", "route": "oral", "timing": "before_meal",
             "instructions": "نیم ساعت قبل از غذا", "notes": "دوره درمان کامل شود"},
            {"id": "2", "medicine": "Ibuprofen", "dosage": "400 mg", "form": "tablet",
             "frequency": "هر ۸ ساعت", "duration": "۵ روز", "route": "oral", "withFood": True,
             "instructions": "با غذا مصرف شود", "notes": "برای درد و التهاب"},
        ],
        "instructions": "غرغره آب نمک، مصرف مایعات فراوان، پرهیز از غذاهای تند",
        "follow_up": "در صورت عدم بهبود پس از ۴۸ ساعت یا تشدید علائم مراجعه شود",
        "restrictions": "پرهیز از غذاهای تند و داغ، محدودیت صحبت کردن",
    },
    "acute_bronchitis": {
        "name": "برونشیت حاد",
        "category": "respiratory",
        "urgency": "medium",
        "patient_info": {"name": "بیمار برونشیت", "age": 48, "gender": "مرد"},
        "diagnosis": "برونشیت حاد",
        "chief_complaint": "سرفه خلط دار، تب و بدن درد",
        "history_of_present_illness": "سرفه خلط دار از یک هفته قبل که به تدریج تشدید یافته است",
        "physical_examination": "رال خشک در قاعده ریه راست، سرفه‌های خلط دار",
        "medicines": [
            {"id": "1", "medicine": "Amoxicillin", "dosage": "500 mg", "form": "capsule",
             "frequency": "هر ۸ ساعت", "duration": "۷ روز", "route": "oral",
             "instructions": "قبل از غذا مصرف شود", "notes": "آنتی بیوتیک وسیع الطیف"},
            {"id": "2", "medicine": "Bromhexine", "dosage": "8 mg", "form": "tablet",
             "frequency": "هر ۸ ساعت", "duration": "۵ روز", "route": "oral",
             "instructions": "بعد از غذا", "notes": "اکسپکتورانت"},
        ],
        "instructions": "استراحت کافی، مصرف مایعات گرم، اجتناب از هوای سرد",
        "follow_up": "در صورت عدم بهبود پس از ۴۸ ساعت یا تشدید علائم مراجعه شود",
        "restrictions": "پرهیز از سیگار و هوای آلوده، محدودیت فعالیت بدنی شدید",
    },
    "urinary_tract_infection": {
        "name": "عفونت ادراری",
        "category": "urology",
        "urgency": "medium",
        "patient_info": {"name": "بیمار عفونت ادراری", "age": 30, "gender": "زن"},
        "diagnosis": "عفونت ادراری",
        "chief_complaint": "سوزش ادرار و تکرر ادرار",
        "history_of_present_illness": "سوزش و تکرر ادرار از ۲ روز قبل، بدون تب",
        "physical_examination": "حساسیت خفیف در ناحیه سوپراپوبیک، بدون ادم",
        "medicines": [
            {"id": "1", "medicine": "Ciprofloxacin", "dosage": "500 mg", "form": "tablet",
             "frequency": "هر ۱۲ ساعت", "duration": "۷ روز", "route": "oral", "timing": "empty_stomach",
             "instructions": "با معده خالی", "notes": "آنتی بیوتیک"},
            {"id": "2", "medicine": "Phenazopyridine", "dosage": "200 mg", "form": "tablet",
             "frequency": "هر ۸ ساعت", "duration": "۲ روز", "route": "oral",
             "instructions": "بعد از غذا", "notes": "برای سوزش ادرار"},
        ],
        "instructions": "مصرف زیاد مایعات، پرهیز از کافئین",
        "follow_up": "در صورت عدم بهبود پس از ۴۸ ساعت یا تشدید علائم مراجعه شود",
        "restrictions": "پرهیز از رابطه جنسی تا پایان درمان، محدودیت فعالیت شدید",
    },
    "migraine": {
        "name": "میگرن",
        "category": "neurology",
        "urgency": "medium",
        "patient_info": {"name": "بیمار میگرن", "age": 28, "gender": "زن"},
        "diagnosis": "میگرن",
        "chief_complaint": "سردرد ضربان دار و تهوع",
        "history_of_present_illness": "سردرد یک طرفه ضربان دار همراه با حساسیت به نور",
        "physical_examination": "فشار خون نرمال، عدم وجود علائم عصبی کانونی",
        "medicines": [
            {"id": "1", "medicine": "Sumatriptan", "dosage": "50 mg", "form": "tablet",
             "frequency": "در شروع حمله", "duration": "طبق نیاز", "route": "oral", "timing": "anytime",
             "instructions": "در شروع سردرد مصرف شود", "notes": "حداکثر ۲ عدد در روز"},
            {"id": "2", "medicine": "Metoclopramide", "dosage": "10 mg", "form": "tablet",
             "frequency": "هر ۸ ساعت در صورت تهوع", "duration": "۲ روز", "route": "oral",
             "timing": "before_meal", "instructions": "قبل از غذا", "notes": "برای تهوع و استفراغ"},
        ],
        "instructions": "استراحت در محیط تاریک و ساکت، پرهیز از محرک‌های غذایی",
        "follow_up": "در صورت تکرار حملات بیش از ۴ بار در ماه مراجعه شود",
        "restrictions": "پرهیز از پنیر کهنه، شکلات، قهوه و استرس",
    },
}


def is_predefined(preset_id: str) -> bool:
    return preset_id in PREDEFINED_PRESETS


def predefined_preset(preset_id: str) -> Dict:
    """Copy of one template with its id and a fresh timestamp."""
    return {"id": preset_id, "predefined": True, "created_at": iso_timestamp(), **PREDEFINED_PRESETS[preset_id]}
