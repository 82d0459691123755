# Generated migration: keep the redeemed prize id after catalog deletion

from django.db import migrations, models


def copy_prize_ids(apps, schema_editor):
    HistoryRecord = apps.get_model("pointsman", "HistoryRecord")
    HistoryRecord.objects.filter(prize__isnull=False).update(prize_ref=models.F("prize_id"))


class Migration(migrations.Migration):

    dependencies = [
        ("pointsman", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="historyrecord",
            name="prize_ref",
            field=models.BigIntegerField(
                blank=True,
                help_text="Id of the redeemed prize, kept when the prize is deleted",
                null=True,
                verbose_name="prize id",
            ),
        ),
        migrations.RunPython(copy_prize_ids, migrations.RunPython.noop),
    ]
