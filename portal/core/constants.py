# portal/core/constants.py

from portal.models.enums import ApplicationStatus, GuardianRelation

# ==========================================================
# BACKEND ENDPOINTS
# ==========================================================
AUTH_REGISTER = "/api/student/auth/register"
AUTH_LOGIN = "/api/student/auth/login"

PROFILE_DETAILS = "/api/student/profile/details"
PROFILE_NOTIFICATIONS = "/api/student/profile/notifications"
PROFILE_FEES = "/api/student/profile/fees"
PROFILE_ASSIGNMENTS = "/api/student/profile/assignments"
NOTIFICATION_READ = "/api/student/profile/notifications/{notification_id}/read"

# Id-scoped variants, used when a student id is known
STUDENT_DETAILS = "/api/Student/{student_id}"
STUDENT_NOTIFICATIONS = "/api/Student/{student_id}/Notifications"
STUDENT_FEES = "/api/Student/{student_id}/Fees"
STUDENT_ASSIGNMENTS = "/api/Student/{student_id}/Assignment"
STUDENT_PAYMENTS = "/api/Student/{student_id}/Payments"

PAYMENTS = "/api/student/payments"
PAYMENT_PAY = "/api/student/payments/pay/{fee_id}"

COMPLAINTS = "/api/student/complaints"
COMPLAINT_SUBMIT = "/api/student/complaints/submit"

APPLICATION_SUBMIT = "/api/student/applications/submit"
MY_APPLICATIONS = "/api/student/applications/my-applications"
SEARCH_BY_NATIONAL_ID = "/api/Application/SearchByNationalId/{national_id}"

# ==========================================================
# CLIENT-LOCAL STORAGE KEYS
# ==========================================================
TOKEN_KEY = "token"
USER_KEY = "user"

# Stored when the backend returns a token but no usable profile
PLACEHOLDER_USER = {"username": "user"}
DEFAULT_ROLE = "student"

# Probed in order when picking the most recent application
TIMESTAMP_FIELDS = ("submittedAt", "createdAt", "date")

NATIONAL_ID_LENGTH = 14

# ==========================================================
# DISPLAY LABELS
# ==========================================================
GUARDIAN_RELATION_LABELS = {
    GuardianRelation.Father: "الأب",
    GuardianRelation.Mother: "الأم",
    GuardianRelation.Brother: "الأخ",
    GuardianRelation.Uncle: "العم/الخال",
    GuardianRelation.Other: "أخرى",
}

APPLICATION_STATUS_LABELS = {
    ApplicationStatus.Submitted.value: "تم التقديم",
    ApplicationStatus.Review.value: "قيد المراجعة",
    ApplicationStatus.Approved.value: "موافق عليه",
    ApplicationStatus.Rejected.value: "مرفوض",
}

# ==========================================================
# USER-FACING MESSAGES
# ==========================================================
MSG_NATIONAL_ID_REQUIRED = "يرجى إدخال الرقم القومي"
MSG_NATIONAL_ID_INVALID = "الرقم القومي يجب أن يكون 14 رقم"
MSG_APPLICATION_NOT_FOUND = "عذرًا، لم يتم العثور على طلب بهذا الرقم القومي"
MSG_CONNECTION_FAILED = "فشل الاتصال بالخادم، يرجى المحاولة لاحقاً"
MSG_SUBMIT_FAILED = "فشل تقديم الطلب"
MSG_SUBMIT_SUCCESS = "تم تقديم الطلب بنجاح! سيتم مراجعته والرد عليك قريباً."
MSG_LOGIN_FAILED = "فشل تسجيل الدخول"
MSG_SIGNUP_FAILED = "فشل إنشاء الحساب"
MSG_PAYMENT_FAILED = "فشل عملية الدفع"
MSG_COMPLAINT_FAILED = "فشل تقديم الشكوى"
MSG_COMPLAINT_FIELDS_REQUIRED = "يرجى ملء جميع الحقول المطلوبة"
MSG_COMPLAINT_SUCCESS = "تم تقديم الشكوى بنجاح!"
MSG_PASSWORDS_MISMATCH = "كلمات المرور غير متطابقة"


def status_label(status: str | None) -> str:
    if not status:
        return "غير محدد"
    return APPLICATION_STATUS_LABELS.get(status, status)
