# apps/core/models.py

from django.contrib.auth.models import AbstractUser
from django.db import models


class Organizacao(models.Model):
    """
    Organização (tenant) do Órbita

    Todo dado de pessoas, equipes e iniciativas pertence a exatamente
    uma organização e nunca é visível fora dela.
    """

    nome = models.CharField(max_length=200)
    slug = models.SlugField(max_length=200, unique=True)
    ativo = models.BooleanField(default=True)
    criado_em = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'organizacao'
        ordering = ['nome']

    def __str__(self):
        return self.nome


class Usuario(AbstractUser):
    """
    Modelo de usuário customizado com suporte a multi-tenancy

    Cada usuário pertence a uma organização e só pode acessar
    dados da própria organização.
    """

    TIPO_CHOICES = [
        ('admin', 'Administrador'),
        ('gerente', 'Gerente'),
        ('funcionario', 'Funcionário'),
    ]

    telefone = models.CharField(max_length=20, blank=True)
    tipo = models.CharField(max_length=20, choices=TIPO_CHOICES, default='funcionario')

    # === MULTI-TENANCY: CAMPO FUNDAMENTAL ===
    organizacao = models.ForeignKey(
        Organizacao,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='usuarios'
    )

    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'usuario'
        indexes = [
            models.Index(fields=['organizacao', 'tipo'], name='usuario_org_tipo_idx'),
        ]

    def __str__(self):
        nome_completo = self.get_full_name()
        if nome_completo:
            return f"{nome_completo} ({self.organizacao})"
        return f"{self.username} ({self.organizacao})"


class Equipe(models.Model):
    """Equipe dentro da organização"""

    nome = models.CharField(max_length=200)
    organizacao = models.ForeignKey(
        Organizacao,
        on_delete=models.CASCADE,
        related_name='equipes'
    )
    criado_em = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'equipe'
        ordering = ['nome']
        unique_together = ['organizacao', 'nome']

    def __str__(self):
        return self.nome


class Pessoa(models.Model):
    """
    Pessoa do diretório da organização

    Não precisa ter login: o vínculo com Usuario é opcional.
    """

    nome = models.CharField(max_length=200)
    email = models.EmailField(blank=True)
    avatar = models.URLField(blank=True, null=True)
    organizacao = models.ForeignKey(
        Organizacao,
        on_delete=models.CASCADE,
        related_name='pessoas'
    )
    equipe = models.ForeignKey(
        Equipe,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='membros'
    )
    usuario = models.OneToOneField(
        Usuario,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='pessoa'
    )
    criado_em = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'pessoa'
        ordering = ['nome']

    def __str__(self):
        return self.nome
