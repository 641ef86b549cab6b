import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('core', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Iniciativa',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('titulo', models.CharField(max_length=200)),
                ('resumo', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('planejada', 'Planejada'), ('em_andamento', 'Em andamento'), ('pausada', 'Pausada'), ('concluida', 'Concluída'), ('cancelada', 'Cancelada')], default='planejada', max_length=20)),
                ('rag', models.CharField(choices=[('verde', '🟢 Verde'), ('ambar', '🟡 Âmbar'), ('vermelho', '🔴 Vermelho')], default='verde', max_length=10)),
                ('prioridade', models.IntegerField(default=2, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(5)])),
                ('tamanho', models.CharField(blank=True, choices=[('xs', 'XS'), ('s', 'S'), ('m', 'M'), ('l', 'L'), ('xl', 'XL')], max_length=2)),
                ('slot', models.PositiveIntegerField(blank=True, help_text='Posição no quadro de slots - vazio = sem slot', null=True, validators=[django.core.validators.MinValueValidator(1)])),
                ('data_inicio', models.DateField(blank=True, null=True)),
                ('data_alvo', models.DateField(blank=True, null=True)),
                ('criado_em', models.DateTimeField(auto_now_add=True)),
                ('atualizado_em', models.DateTimeField(auto_now=True)),
                ('criado_por', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='iniciativas_criadas', to=settings.AUTH_USER_MODEL)),
                ('equipe', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='iniciativas', to='core.equipe')),
                ('organizacao', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='iniciativas', to='core.organizacao')),
            ],
            options={
                'db_table': 'iniciativa',
                'ordering': ['slot', '-atualizado_em'],
                'indexes': [models.Index(fields=['organizacao', 'status'], name='iniciativa_org_status_idx')],
                'constraints': [models.UniqueConstraint(condition=models.Q(('slot__isnull', False)), fields=('organizacao', 'slot'), name='iniciativa_slot_unico_por_organizacao')],
            },
        ),
        migrations.CreateModel(
            name='IniciativaResponsavel',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('papel', models.CharField(choices=[('responsavel', 'Responsável'), ('patrocinador', 'Patrocinador'), ('colaborador', 'Colaborador')], default='responsavel', max_length=20)),
                ('iniciativa', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='responsaveis', to='iniciativas.iniciativa')),
                ('pessoa', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='iniciativas_responsavel', to='core.pessoa')),
            ],
            options={
                'db_table': 'iniciativa_responsavel',
                'ordering': ['id'],
                'unique_together': {('iniciativa', 'pessoa')},
            },
        ),
    ]
