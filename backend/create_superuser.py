"""
Script to create an admin-role superuser non-interactively.
Usage:
  python create_superuser.py <email> <password>
  OR
  DJANGO_SUPERUSER_EMAIL=admin@example.com DJANGO_SUPERUSER_PASSWORD=password python create_superuser.py
"""
import os
import sys
import django

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'sports_reels.settings')
django.setup()

from django.contrib.auth import get_user_model
from django.db import IntegrityError
from sports_reels.services import token_service

User = get_user_model()
USAGE = 'Usage: python create_superuser.py <email> <password>'


def create_superuser():
    if len(sys.argv) >= 3:
        email, password = sys.argv[1], sys.argv[2]
    else:
        email = os.getenv('DJANGO_SUPERUSER_EMAIL')
        password = os.getenv('DJANGO_SUPERUSER_PASSWORD')

    if not email or not password:
        print('Error: email and password are required.')
        print(USAGE)
        print('   OR: Set DJANGO_SUPERUSER_EMAIL and DJANGO_SUPERUSER_PASSWORD environment variables')
        sys.exit(1)

    if User.objects.filter(email__iexact=email).exists():
        print(f'User with email {email} already exists.')
        return

    try:
        user = User.objects.create_superuser(email=email, password=password)
    except IntegrityError as e:
        print(f'Error creating superuser: {e}')
        sys.exit(1)
    token_service.get_or_create_balance(user)
    print(f'Superuser {email} created with role {user.role}.')


if __name__ == '__main__':
    create_superuser()
