"""
User and team models for account management.
"""
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models


class UserManager(BaseUserManager):
    """Custom user manager where email is the unique identifier."""

    def create_user(self, email, password=None, **extra_fields):
        """Create and save a regular user with the given email and password."""
        if not email:
            raise ValueError('The Email field must be set')
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Create and save a superuser with the given email and password."""
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', User.Role.ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, password, **extra_fields)


class Team(models.Model):
    """A club account that owns players, videos and federation requests."""

    name = models.CharField(max_length=200)
    club_name = models.CharField(max_length=200, blank=True, default='')
    country = models.CharField(max_length=100, blank=True, default='')
    league_band = models.PositiveSmallIntegerField(default=3)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'teams'
        ordering = ['name']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(league_band__gte=1, league_band__lte=5),
                name='teams_league_band_range',
            ),
        ]

    def __str__(self):
        return self.name


class User(AbstractUser):
    """Platform user; the role decides which portal and endpoints apply."""

    class Role(models.TextChoices):
        SPORTING_DIRECTOR = 'sporting_director', 'Sporting Director'
        LEGAL = 'legal', 'Legal'
        SCOUT = 'scout', 'Scout'
        COACH = 'coach', 'Coach'
        AGENT = 'agent', 'Agent'
        ADMIN = 'admin', 'Admin'
        EMBASSY = 'embassy', 'Embassy'
        FEDERATION_ADMIN = 'federation_admin', 'Federation Admin'

    TEAM_ROLES = frozenset({Role.SPORTING_DIRECTOR, Role.LEGAL, Role.COACH})
    SCOUT_ROLES = frozenset({Role.SCOUT, Role.AGENT})

    username = None  # Remove username field
    email = models.EmailField(unique=True, db_index=True)
    first_name = models.CharField(max_length=150, blank=True)
    last_name = models.CharField(max_length=150, blank=True)
    role = models.CharField(max_length=30, choices=Role.choices, default=Role.SCOUT, db_index=True)
    team = models.ForeignKey(
        Team,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='members',
    )
    embassy_country = models.CharField(max_length=100, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Use email as username
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []  # email is already in USERNAME_FIELD

    objects = UserManager()  # Use custom manager

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['-created_at']

    def __str__(self):
        return self.email

    def get_full_name(self):
        """Return the full name of the user."""
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name if full_name else self.email

    def get_short_name(self):
        """Return the short name for the user."""
        return self.first_name or self.email

    @property
    def is_team_member(self) -> bool:
        return self.role in self.TEAM_ROLES

    @property
    def is_scout(self) -> bool:
        return self.role in self.SCOUT_ROLES
