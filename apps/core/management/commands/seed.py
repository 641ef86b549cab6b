# apps/core/management/commands/seed.py

from django.conf import settings
from django.core.management.base import BaseCommand
from django.db import transaction

from apps.core.models import Organizacao, Usuario, Equipe, Pessoa
from apps.iniciativas.models import Iniciativa, IniciativaResponsavel

SLUG_DEMO = 'orbita-demo'
SENHA_DEMO = 'orbita123'

EQUIPES = ['Plataforma', 'Produto', 'Dados']

PESSOAS = [
    ('Ana Souza', 'Plataforma'),
    ('Bruno Lima', 'Plataforma'),
    ('Carla Mendes', 'Produto'),
    ('Diego Alves', 'Produto'),
    ('Elisa Rocha', 'Dados'),
]

# (titulo, equipe, status, rag, slot, responsáveis)
INICIATIVAS = [
    ('Migração para Kubernetes', 'Plataforma', 'em_andamento', 'ambar', 1, ['Ana Souza']),
    ('Novo onboarding', 'Produto', 'em_andamento', 'verde', 2, ['Carla Mendes', 'Diego Alves']),
    ('Data warehouse v2', 'Dados', 'planejada', 'verde', 3, ['Elisa Rocha']),
    ('Observabilidade', 'Plataforma', 'pausada', 'vermelho', 5, ['Bruno Lima']),
    ('App mobile', 'Produto', 'planejada', 'verde', None, ['Diego Alves']),
    ('Modelo de churn', 'Dados', 'planejada', 'ambar', None, ['Elisa Rocha']),
    ('Redesign do checkout', 'Produto', 'concluida', 'verde', None, ['Carla Mendes']),
]


class Command(BaseCommand):
    help = 'Cria uma organização de demonstração com equipes, pessoas e iniciativas'

    def add_arguments(self, parser):
        parser.add_argument(
            '--limpar',
            action='store_true',
            help='Remove a organização de demonstração antes de recriar'
        )

    def handle(self, *args, **options):
        if not settings.DEBUG:
            self.stdout.write(
                self.style.ERROR('🚫 BLOQUEADO: Este comando só funciona em modo DEBUG.')
            )
            return

        existente = Organizacao.objects.filter(slug=SLUG_DEMO).first()
        if existente and not options['limpar']:
            self.stdout.write(
                self.style.WARNING(
                    '⚠️  Organização de demonstração já existe.\n'
                    '   Para recriar execute: python manage.py seed --limpar'
                )
            )
            return

        with transaction.atomic():
            if existente:
                self._limpar(existente)
            organizacao = self._criar_dados()

        self.stdout.write(
            self.style.SUCCESS(
                f'\n✅ Organização "{organizacao.nome}" criada!\n'
                '\n'
                'Usuários (senha: {senha}):\n'
                '  • admin.demo (administrador)\n'
                '  • gerente.demo (gerente)\n'
                '  • ana.demo (funcionária)\n'
                '\n'
                'Acesse /iniciativas/slots/ para ver o quadro.\n'.format(senha=SENHA_DEMO)
            )
        )

    def _limpar(self, organizacao):
        self.stdout.write('🗑️  Removendo dados de demonstração...')
        Iniciativa.objects.filter(organizacao=organizacao).delete()
        Usuario.objects.filter(organizacao=organizacao).delete()
        organizacao.delete()

    def _criar_dados(self):
        self.stdout.write('🌱 Criando organização de demonstração...')
        organizacao = Organizacao.objects.create(nome='Órbita Demo', slug=SLUG_DEMO)

        admin = self._criar_usuario(organizacao, 'admin.demo', 'admin', 'Admin', is_staff=True)
        self._criar_usuario(organizacao, 'gerente.demo', 'gerente', 'Gerente')
        ana = self._criar_usuario(organizacao, 'ana.demo', 'funcionario', 'Ana')

        equipes = {
            nome: Equipe.objects.create(organizacao=organizacao, nome=nome)
            for nome in EQUIPES
        }
        self.stdout.write(f'  ✅ {len(equipes)} equipes')

        pessoas = {
            nome: Pessoa.objects.create(
                organizacao=organizacao,
                nome=nome,
                email=f"{nome.split()[0].lower()}@orbita.demo",
                equipe=equipes[equipe],
                usuario=ana if nome == 'Ana Souza' else None,
            )
            for nome, equipe in PESSOAS
        }
        self.stdout.write(f'  ✅ {len(pessoas)} pessoas')

        for titulo, equipe, status, rag, slot, responsaveis in INICIATIVAS:
            iniciativa = Iniciativa.objects.create(
                organizacao=organizacao,
                titulo=titulo,
                equipe=equipes[equipe],
                status=status,
                rag=rag,
                slot=slot,
                criado_por=admin,
            )
            for nome in responsaveis:
                IniciativaResponsavel.objects.create(iniciativa=iniciativa, pessoa=pessoas[nome])
        self.stdout.write(f'  ✅ {len(INICIATIVAS)} iniciativas')

        return organizacao

    def _criar_usuario(self, organizacao, username, tipo, first_name, is_staff=False):
        return Usuario.objects.create_user(
            username=username,
            password=SENHA_DEMO,
            first_name=first_name,
            last_name='Demo',
            email=f'{username}@orbita.demo',
            tipo=tipo,
            organizacao=organizacao,
            is_staff=is_staff,
        )
