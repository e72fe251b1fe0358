# create.py - create an account from the command line
from getpass import getpass

from testimonialhub import create_app
from testimonialhub.exceptions import Conflict, ValidationFailed
from testimonialhub.services.accounts import register_user


def main():
    app = create_app()
    with app.app_context():
        name = input("Full name: ").strip()
        email = input("Email: ").strip().lower()
        company = input("Company (optional): ").strip()
        password = getpass("Password: ")

        try:
            user = register_user({"name": name, "email": email, "password": password, "company": company})
        except ValidationFailed as e:
            for err in e.errors:
                print(f"{err['field']}: {err['message']}")
            return 1
        except Conflict as e:
            print(e.message)
            return 1

        print(f"User {user.email} created successfully.")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
