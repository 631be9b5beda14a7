# portal/models/enums.py
from enum import Enum, IntEnum


class StudentType(IntEnum):
    New = 0
    Continuing = 1


class GuardianRelation(str, Enum):
    Father = "father"
    Mother = "mother"
    Brother = "brother"
    Uncle = "uncle"    # uncle or aunt
    Other = "other"


class Gender(str, Enum):
    Male = "ذكر"
    Female = "أنثى"


class Religion(str, Enum):
    Muslim = "مسلم"
    Christian = "مسيحي"


class SecondaryStream(str, Enum):
    Science = "علمي علوم"
    Mathematics = "علمي رياضة"
    Literary = "أدبي"


class Grade(str, Enum):
    Excellent = "ممتاز"
    VeryGood = "جيد جداً"
    Good = "جيد"
    Pass = "مقبول"


class Level(str, Enum):
    First = "الأولى"
    Second = "الثانية"
    Third = "الثالثة"
    Fourth = "الرابعة"
    Fifth = "الخامسة"
    Sixth = "السادسة"


class Governorate(str, Enum):
    Cairo = "القاهرة"
    Giza = "الجيزة"
    Alexandria = "الإسكندرية"
    Dakahlia = "الدقهلية"
    RedSea = "البحر الأحمر"
    Beheira = "البحيرة"
    Fayoum = "الفيوم"
    Gharbia = "الغربية"
    Ismailia = "الإسماعيلية"
    Monufia = "المنوفية"
    Minya = "المنيا"
    Qalyubia = "القليوبية"
    NewValley = "الوادي الجديد"
    Suez = "السويس"
    Sharqia = "الشرقية"
    SouthSinai = "جنوب سيناء"
    KafrElSheikh = "كفر الشيخ"
    Matrouh = "مطروح"
    Luxor = "الأقصر"
    Qena = "قنا"
    NorthSinai = "شمال سيناء"
    Sohag = "سوهاج"
    Aswan = "أسوان"
    Asyut = "أسيوط"
    BeniSuef = "بني سويف"
    PortSaid = "بورسعيد"
    Damietta = "دمياط"


class ApplicationStatus(str, Enum):
    Submitted = "submitted"
    Review = "review"
    Approved = "approved"
    Rejected = "rejected"


class AuthStatus(str, Enum):
    Loading = "loading"
    Authenticated = "authenticated"
    Unauthenticated = "unauthenticated"
