# app/core/constants.py
from enum import Enum

class ResponseCode(Enum):
    FAIL = ("FAIL", "오류가 발생했습니다.")

    FAIL_VALID_TOKEN = ("FAIL_VALID_TOKEN", "토큰 유효성 검사에 실패했습니다.")
    INVALID_ACCESS_TOKEN = ("INVALID_ACCESS_TOKEN", "엑세스 토큰이 유효한 값이 아닙니다.")
    EXPIRE_ACCESS_TOKEN = ("EXPIRE_ACCESS_TOKEN", "엑세스 토큰이 만료되었습니다.")
    EXPIRE_SESSION = ("EXPIRE_SESSION", "로그아웃된 세션입니다. 다시 로그인해주세요.")
    PERMISSION_DENIED = ("PERMISSION_DENIED", "권한이 없습니다.")
    INVALID_LOGIN_INFO = ("INVALID_LOGIN_INFO", "이메일 또는 비밀번호가 올바르지 않습니다.")
    NOT_MASTER_USER = ("NOT_MASTER_USER", "관리자 권한이 없습니다.")
    UNAPPROVED_USER = ("UNAPPROVED_USER", "아직 승인되지 않은 계정입니다. 관리자의 승인을 기다려주세요.")

    REQUIRED_FIELDS = ("REQUIRED_FIELDS", "모든 필드를 입력해주세요.")
    PASSWORD_MISMATCH = ("PASSWORD_MISMATCH", "비밀번호가 일치하지 않습니다.")
    PASSWORD_TOO_SHORT = ("PASSWORD_TOO_SHORT", "비밀번호는 최소 6자 이상이어야 합니다.")
    DUPLICATED_EMAIL = ("DUPLICATED_EMAIL", "이미 가입된 이메일입니다.")
    INVALID_USER = ("INVALID_USER", "사용자가 유효하지 않습니다.")
    INVALID_USER_ROLE = ("INVALID_USER_ROLE", "가입 신청 정보가 유효하지 않습니다.")

    INVALID_PROJECT = ("INVALID_PROJECT", "프로젝트를 찾을 수 없습니다.")
    REQUIRED_PROJECT_FIELDS = ("REQUIRED_PROJECT_FIELDS", "프로젝트 이름과 URL 주소를 모두 입력해주세요.")
    INVALID_SLUG = ("INVALID_SLUG", "URL 주소는 영문 소문자, 숫자, 하이픈(-)만 사용할 수 있습니다.")
    DUPLICATED_SLUG = ("DUPLICATED_SLUG", "이미 사용 중인 URL 주소입니다.")
    PROJECT_PASSWORD_NOT_SET = ("PROJECT_PASSWORD_NOT_SET", "이 프로젝트는 비밀번호가 설정되지 않았습니다.")
    INVALID_PROJECT_PASSWORD = ("INVALID_PROJECT_PASSWORD", "비밀번호가 일치하지 않습니다.")

    INVALID_PARKING_TYPE = ("INVALID_PARKING_TYPE", "주차권을 찾을 수 없습니다.")
    INVALID_PARKING_TYPE_INPUT = ("INVALID_PARKING_TYPE_INPUT", "모든 필드를 올바르게 입력해주세요.")
    INVALID_PARKING_TYPE_ORDER = ("INVALID_PARKING_TYPE_ORDER", "주차권 순서 정보가 올바르지 않습니다.")

    INVALID_CAR_NUMBER = ("INVALID_CAR_NUMBER", "차량번호 형식을 확인해주세요.")
    INVALID_LAST_FOUR = ("INVALID_LAST_FOUR", "차량번호 뒤 4자리 숫자를 입력해주세요.")
    MISSING_REQUIRED_FIELD = ("MISSING_REQUIRED_FIELD", "필수 항목이 누락되었습니다.")
    INVALID_CUSTOM_FIELD_VALUE = ("INVALID_CUSTOM_FIELD_VALUE", "입력 항목의 형식이 올바르지 않습니다.")
    INVALID_APPLICATION = ("INVALID_APPLICATION", "신청 정보를 찾을 수 없습니다.")
    NO_APPLICATION = ("NO_APPLICATION", "해당 번호로 등록된 신청이 없습니다.")
    EMPTY_SELECTION = ("EMPTY_SELECTION", "선택된 신청이 없습니다.")
    NO_PARKING_TYPE_SELECTED = ("NO_PARKING_TYPE_SELECTED", "주차권을 선택해주세요.")

    INVALID_FONT_SIZE = ("INVALID_FONT_SIZE", "글자 크기는 양의 정수여야 합니다.")
    INVALID_CUSTOM_FIELD = ("INVALID_CUSTOM_FIELD", "유효하지 않은 입력 항목입니다.")
    NOT_SELECT_FIELD = ("NOT_SELECT_FIELD", "선택형 항목에만 옵션을 추가할 수 있습니다.")
    INVALID_OPTION = ("INVALID_OPTION", "유효하지 않은 옵션입니다.")
    FAILED_SAVE_SETTINGS = ("FAILED_SAVE_SETTINGS", "설정 저장에 실패했습니다.")

    INVALID_QR_CODE = ("INVALID_QR_CODE", "QR코드를 찾을 수 없습니다.")
    INVALID_QR_SIZE = ("INVALID_QR_SIZE", "QR코드 크기가 올바르지 않습니다.")
    INVALID_COLOR = ("INVALID_COLOR", "색상은 #RRGGBB 형식이어야 합니다.")

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
