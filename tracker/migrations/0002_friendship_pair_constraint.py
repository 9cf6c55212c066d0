from django.db import migrations, models
from django.db.models.functions import Greatest, Least


class Migration(migrations.Migration):

    dependencies = [
        ("tracker", "0001_initial"),
    ]

    operations = [
        migrations.AddConstraint(
            model_name="friendship",
            constraint=models.UniqueConstraint(
                Least("user_id_1", "user_id_2"),
                Greatest("user_id_1", "user_id_2"),
                name="friendships_pair_uniq",
            ),
        ),
    ]
