"""
User-facing messages.

The booking UI is Korean-only, so every message that reaches a client is
kept here in one place.
"""

# Availability
MSG_AVAILABILITY_LOADED = "가용성 정보를 불러왔습니다."
MSG_AVAILABILITY_LOAD_FAILED = "가용성 정보를 불러오는 중 오류가 발생했습니다."
MSG_AVAILABILITY_UPDATED = "가용성 정보가 업데이트되었습니다."
MSG_AVAILABILITY_RESET = "모든 예약 및 가용성 데이터가 초기화되었습니다."
MSG_INVALID_YEAR_MONTH = "유효한 년월 형식이 아닙니다. YYYY-MM 형식을 사용하세요."
MSG_INVALID_DATE = "유효한 날짜 형식이 아닙니다. YYYY-MM-DD 형식을 사용하세요."
MSG_INVALID_TIME_SLOT = "시간대는 'morning' 또는 'afternoon'이어야 합니다."
MSG_INVALID_CAPACITY = "용량은 0 이상의 숫자여야 합니다."
MSG_INVALID_EMAIL = "유효한 이메일 주소를 입력해주세요."
MSG_SLOT_NOT_FOUND = "해당 날짜와 시간대의 가용성 정보를 찾을 수 없습니다."
MSG_SLOT_ALREADY_EXISTS = "해당 날짜와 시간대의 가용성 정보가 이미 존재합니다."

# Reservations
MSG_RESERVATION_CREATED = "예약이 성공적으로 완료되었습니다."
MSG_RESERVATION_DELETED = "예약이 성공적으로 삭제되었습니다."
MSG_RESERVATION_NOT_FOUND = "예약을 찾을 수 없습니다."
MSG_RESERVATION_FAILED = "예약 중 오류가 발생했습니다."
MSG_RESERVATIONS_LOADED = "예약 목록을 불러왔습니다."
MSG_SLOT_CLOSED = "해당 시간대는 예약이 마감되었습니다."
MSG_CAPACITY_EXCEEDED = "예약 가능 인원을 초과했습니다."
MSG_LOOKUP_FIELDS_REQUIRED = "이름과 전화번호를 모두 입력해주세요."
MSG_RESERVATION_ID_EXHAUSTED = "예약 번호를 생성하지 못했습니다. 잠시 후 다시 시도해주세요."

# Validation
MSG_REQUIRED_FIELDS_MISSING = "필수 필드가 누락되었습니다."
MSG_VALIDATION_FAILED = "입력값이 올바르지 않습니다."

# Admin
MSG_ADMIN_AUTH_REQUIRED = "관리자 인증이 필요합니다."
MSG_ADMIN_PASSWORD_INVALID = "비밀번호가 올바르지 않습니다."
MSG_ADMIN_LOGIN_SUCCESS = "관리자 로그인에 성공했습니다."
MSG_ADMIN_LOGOUT_SUCCESS = "로그아웃되었습니다."

# Generic
MSG_INTERNAL_ERROR = "서버 오류가 발생했습니다. 잠시 후 다시 시도해주세요."
MSG_NOT_FOUND = "요청한 리소스를 찾을 수 없습니다."
MSG_SERVICE_UNAVAILABLE = "서비스를 준비 중입니다. 잠시 후 다시 시도해주세요."
