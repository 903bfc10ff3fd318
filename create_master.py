# app/create_master.py
import argparse
import getpass
import logging
import sys

from core.database import SessionLocal, Base, engine
from core import models
from function.login_function import hash_password, MIN_PASSWORD_LENGTH


def create_master(db, email: str, password: str, full_name: str, organization: str, position: str) -> models.UserRole:
    """
    승인된 관리자 계정을 생성합니다.
    가입 승인은 승인된 관리자만 할 수 있으므로 최초 관리자는 이 스크립트로 만듭니다.
    이미 가입된 이메일이면 권한을 승인 상태로 바꿉니다.
    """
    email = email.strip().lower()
    user = db.query(models.User).filter(models.User.email == email).first()
    if not user:
        user = models.User(email=email, password_hash=hash_password(password))
        db.add(user)
        db.flush()

    profile = db.query(models.Profile).filter(models.Profile.user_id == user.user_id).first()
    if not profile:
        db.add(models.Profile(
            user_id=user.user_id,
            full_name=full_name,
            organization=organization,
            position=position,
            email=email,
        ))

    user_role = db.query(models.UserRole).filter(models.UserRole.user_id == user.user_id).first()
    if not user_role:
        user_role = models.UserRole(user_id=user.user_id, role=models.RoleType.MASTER)
        db.add(user_role)
    user_role.approved = True
    db.commit()
    return user_role


def main():
    """
    사용법: python create_master.py <email> --name 홍길동 --organization 본사 --position 관리자
    비밀번호는 실행 중에 입력받습니다.
    """
    parser = argparse.ArgumentParser(description="승인된 관리자 계정 생성")
    parser.add_argument("email")
    parser.add_argument("--name", required=True)
    parser.add_argument("--organization", required=True)
    parser.add_argument("--position", required=True)
    parser.add_argument("--create-tables", action="store_true", help="테이블이 없으면 생성합니다.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    password = getpass.getpass("Password: ")
    if len(password) < MIN_PASSWORD_LENGTH:
        print(f"Error: Password must be at least {MIN_PASSWORD_LENGTH} characters.")
        sys.exit(1)
    if password != getpass.getpass("Password (again): "):
        print("Error: Passwords do not match.")
        sys.exit(1)

    if args.create_tables:
        Base.metadata.create_all(bind=engine)

    db = None
    try:
        db = SessionLocal()
        create_master(db, args.email, password, args.name, args.organization, args.position)
        logging.info(f"Approved master account ready: {args.email}")
    except Exception as e:
        logging.error(f"Failed to create master account '{args.email}': {e}")
        sys.exit(1)
    finally:
        if db:
            db.close()

if __name__ == "__main__":
    main()
