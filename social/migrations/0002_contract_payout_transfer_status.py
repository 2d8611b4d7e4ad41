from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("social", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="contract",
            name="payout_transfer_status",
            field=models.CharField(
                choices=[("none", "None"), ("pending", "Pending"), ("sent", "Sent"), ("failed", "Failed")],
                default="none",
                max_length=20,
            ),
        ),
    ]
