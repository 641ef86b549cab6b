# apps/core/admin.py

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import Organizacao, Usuario, Equipe, Pessoa


@admin.register(Organizacao)
class OrganizacaoAdmin(admin.ModelAdmin):
    """Admin para organizações (tenants)"""

    list_display = ['nome', 'slug', 'usuarios_count', 'ativo', 'criado_em']
    list_filter = ['ativo', 'criado_em']
    search_fields = ['nome', 'slug']
    prepopulated_fields = {'slug': ('nome',)}
    readonly_fields = ['criado_em']

    def usuarios_count(self, obj):
        """Conta usuários da organização"""
        return obj.usuarios.count()

    usuarios_count.short_description = 'Usuários'


@admin.register(Usuario)
class UsuarioAdmin(BaseUserAdmin):
    """Admin customizado para o modelo Usuario"""

    list_display = [
        'username', 'email', 'get_full_name', 'organizacao',
        'tipo_badge', 'is_active', 'date_joined'
    ]
    list_filter = ['tipo', 'organizacao', 'is_staff', 'is_active']
    search_fields = ['username', 'first_name', 'last_name', 'email']
    ordering = ['-date_joined']

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Organização', {
            'fields': ('organizacao', 'tipo', 'telefone')
        }),
    )

    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('Organização', {
            'fields': ('organizacao', 'tipo', 'telefone')
        }),
    )

    def tipo_badge(self, obj):
        """Exibe o tipo de usuário com badge colorido"""
        cores = {
            'admin': '#EF4444',
            'gerente': '#F59E0B',
            'funcionario': '#3B82F6'
        }
        cor = cores.get(obj.tipo, '#6B7280')
        return format_html(
            '<span style="background-color: {}; color: white; '
            'padding: 3px 8px; border-radius: 4px; font-size: 11px;">{}</span>',
            cor, obj.get_tipo_display()
        )

    tipo_badge.short_description = 'Tipo'


class PessoaInline(admin.TabularInline):
    model = Pessoa
    extra = 0
    fields = ['nome', 'email', 'usuario']


@admin.register(Equipe)
class EquipeAdmin(admin.ModelAdmin):
    list_display = ['nome', 'organizacao', 'membros_count', 'criado_em']
    list_filter = ['organizacao']
    search_fields = ['nome']
    inlines = [PessoaInline]

    def membros_count(self, obj):
        return obj.membros.count()

    membros_count.short_description = 'Membros'


@admin.register(Pessoa)
class PessoaAdmin(admin.ModelAdmin):
    list_display = ['nome', 'email', 'equipe', 'organizacao', 'usuario']
    list_filter = ['organizacao', 'equipe']
    search_fields = ['nome', 'email']
    raw_id_fields = ['usuario']


# Configuração do site admin
admin.site.site_header = "Órbita - Administração"
admin.site.site_title = "Órbita Admin"
admin.site.index_title = "Painel Administrativo"
