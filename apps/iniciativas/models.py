# apps/iniciativas/models.py

from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models

from apps.core.models import Organizacao, Equipe, Pessoa


STATUS_ATIVOS = ['planejada', 'em_andamento', 'pausada']
STATUS_ENCERRADOS = ['concluida', 'cancelada']


class IniciativaQuerySet(models.QuerySet):

    def da_organizacao(self, organizacao_id):
        return self.filter(organizacao_id=organizacao_id)

    def ativas(self):
        """Apenas iniciativas que podem ocupar um slot"""
        return self.filter(status__in=STATUS_ATIVOS)

    def sem_slot(self):
        return self.filter(slot__isnull=True)

    def com_slot(self):
        return self.filter(slot__isnull=False)

    def para_quadro(self):
        """Prefetch usado pelo quadro de slots (evita N+1 em equipe/responsáveis)"""
        return self.select_related('equipe').prefetch_related('responsaveis__pessoa')


class Iniciativa(models.Model):
    """
    Iniciativa da organização

    O campo slot posiciona a iniciativa no quadro de slots:
    None significa que ela está no pool (sem slot).
    """

    STATUS_CHOICES = [
        ('planejada', 'Planejada'),
        ('em_andamento', 'Em andamento'),
        ('pausada', 'Pausada'),
        ('concluida', 'Concluída'),
        ('cancelada', 'Cancelada'),
    ]

    RAG_CHOICES = [
        ('verde', '🟢 Verde'),
        ('ambar', '🟡 Âmbar'),
        ('vermelho', '🔴 Vermelho'),
    ]

    TAMANHO_CHOICES = [
        ('xs', 'XS'),
        ('s', 'S'),
        ('m', 'M'),
        ('l', 'L'),
        ('xl', 'XL'),
    ]

    organizacao = models.ForeignKey(
        Organizacao,
        on_delete=models.CASCADE,
        related_name='iniciativas'
    )
    titulo = models.CharField(max_length=200)
    resumo = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='planejada')
    rag = models.CharField(max_length=10, choices=RAG_CHOICES, default='verde')
    prioridade = models.IntegerField(
        default=2,
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    tamanho = models.CharField(max_length=2, choices=TAMANHO_CHOICES, blank=True)
    slot = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1)],
        help_text="Posição no quadro de slots - vazio = sem slot"
    )
    equipe = models.ForeignKey(
        Equipe,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='iniciativas'
    )
    data_inicio = models.DateField(null=True, blank=True)
    data_alvo = models.DateField(null=True, blank=True)
    criado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='iniciativas_criadas'
    )
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    objects = IniciativaQuerySet.as_manager()

    class Meta:
        db_table = 'iniciativa'
        ordering = ['slot', '-atualizado_em']
        constraints = [
            models.UniqueConstraint(
                fields=['organizacao', 'slot'],
                condition=models.Q(slot__isnull=False),
                name='iniciativa_slot_unico_por_organizacao',
            ),
        ]
        indexes = [
            models.Index(fields=['organizacao', 'status'], name='iniciativa_org_status_idx'),
        ]

    def __str__(self):
        return self.titulo


class IniciativaResponsavel(models.Model):
    """Pessoa responsável por uma iniciativa (lista ordenada)"""

    PAPEL_CHOICES = [
        ('responsavel', 'Responsável'),
        ('patrocinador', 'Patrocinador'),
        ('colaborador', 'Colaborador'),
    ]

    iniciativa = models.ForeignKey(
        Iniciativa,
        on_delete=models.CASCADE,
        related_name='responsaveis'
    )
    pessoa = models.ForeignKey(
        Pessoa,
        on_delete=models.CASCADE,
        related_name='iniciativas_responsavel'
    )
    papel = models.CharField(max_length=20, choices=PAPEL_CHOICES, default='responsavel')

    class Meta:
        db_table = 'iniciativa_responsavel'
        ordering = ['id']
        unique_together = ['iniciativa', 'pessoa']

    def __str__(self):
        return f"{self.pessoa.nome} - {self.get_papel_display()} ({self.iniciativa.titulo})"
