# Generated migration for the pointsman ledger

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Store",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, verbose_name="name")),
                ("email", models.EmailField(max_length=254, unique=True, verbose_name="email")),
                (
                    "sector",
                    models.CharField(
                        help_text="Business sector, copied into redemption history",
                        max_length=50,
                        verbose_name="sector",
                    ),
                ),
                ("phone", models.CharField(blank=True, max_length=20, verbose_name="phone")),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="active")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
            ],
            options={
                "verbose_name": "store",
                "verbose_name_plural": "stores",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("first_name", models.CharField(max_length=100, verbose_name="first name")),
                ("last_name", models.CharField(blank=True, max_length=100, verbose_name="last name")),
                ("email", models.EmailField(max_length=254, unique=True, verbose_name="email")),
                ("birthdate", models.DateField(blank=True, null=True, verbose_name="birthdate")),
                ("postcode", models.CharField(blank=True, max_length=20, verbose_name="postcode")),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="active")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
            ],
            options={
                "verbose_name": "customer",
                "verbose_name_plural": "customers",
                "ordering": ["first_name", "last_name"],
            },
        ),
        migrations.CreateModel(
            name="Prize",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, verbose_name="name")),
                ("category", models.CharField(max_length=50, verbose_name="category")),
                ("points", models.PositiveIntegerField(help_text="Point cost of the prize", verbose_name="points")),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="prizes",
                        to="pointsman.store",
                        verbose_name="store",
                    ),
                ),
            ],
            options={
                "verbose_name": "prize",
                "verbose_name_plural": "prizes",
                "ordering": ["store", "points"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(points__gt=0),
                        name="pointsman_prize_points_positive",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="StoreCustomerBalance",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("points", models.IntegerField(default=0, verbose_name="points")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="balances",
                        to="pointsman.customer",
                        verbose_name="customer",
                    ),
                ),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="balances",
                        to="pointsman.store",
                        verbose_name="store",
                    ),
                ),
            ],
            options={
                "verbose_name": "balance",
                "verbose_name_plural": "balances",
                "db_table": "pointsman_store_customer",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("store", "customer"),
                        name="pointsman_unique_store_customer",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(points__gte=0),
                        name="pointsman_balance_points_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="HistoryRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("customer_age", models.PositiveSmallIntegerField(blank=True, null=True, verbose_name="customer age")),
                ("store_sector", models.CharField(max_length=50, verbose_name="store sector")),
                ("prize_name", models.CharField(max_length=100, verbose_name="prize name")),
                ("prize_category", models.CharField(max_length=50, verbose_name="prize category")),
                ("points_spent", models.PositiveIntegerField(verbose_name="points spent")),
                (
                    "idempotency_key",
                    models.CharField(
                        blank=True,
                        help_text="Caller-supplied token that makes a retried redemption a no-op",
                        max_length=100,
                        null=True,
                        unique=True,
                        verbose_name="idempotency key",
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="history",
                        to="pointsman.customer",
                        verbose_name="customer",
                    ),
                ),
                (
                    "prize",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="history",
                        to="pointsman.prize",
                        verbose_name="prize",
                    ),
                ),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="history",
                        to="pointsman.store",
                        verbose_name="store",
                    ),
                ),
            ],
            options={
                "verbose_name": "history record",
                "verbose_name_plural": "history records",
                "db_table": "pointsman_history",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["store", "-created_at"], name="pointsman_h_store_i_5b1f0c_idx"),
                    models.Index(fields=["customer", "-created_at"], name="pointsman_h_custome_8e2a4d_idx"),
                    models.Index(fields=["store_sector"], name="pointsman_h_store_s_c3d9e7_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="PromotionalCode",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.PositiveSmallIntegerField(verbose_name="code")),
                ("issued_at", models.DateTimeField(default=django.utils.timezone.now, verbose_name="issued at")),
                (
                    "store",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="promo_code",
                        to="pointsman.store",
                        verbose_name="store",
                    ),
                ),
            ],
            options={
                "verbose_name": "promotional code",
                "verbose_name_plural": "promotional codes",
            },
        ),
    ]
