# apps/iniciativas/admin.py

from django.contrib import admin
from django.utils.html import format_html
from .models import Iniciativa, IniciativaResponsavel


class ResponsavelInline(admin.TabularInline):
    model = IniciativaResponsavel
    extra = 0
    fields = ['pessoa', 'papel']
    autocomplete_fields = ['pessoa']


@admin.register(Iniciativa)
class IniciativaAdmin(admin.ModelAdmin):
    """Admin para iniciativas e seus slots"""

    list_display = [
        'titulo', 'organizacao', 'slot_badge', 'status',
        'rag_badge', 'equipe', 'atualizado_em'
    ]
    list_filter = ['organizacao', 'status', 'rag', 'equipe']
    search_fields = ['titulo', 'resumo']
    readonly_fields = ['criado_em', 'atualizado_em', 'criado_por']
    ordering = ['organizacao', 'slot']

    fieldsets = (
        ('Informações Básicas', {
            'fields': ('organizacao', 'titulo', 'resumo', 'equipe')
        }),
        ('Andamento', {
            'fields': ('status', 'rag', 'prioridade', 'tamanho', 'slot', 'data_inicio', 'data_alvo')
        }),
        ('Metadados', {
            'fields': ('criado_por', 'criado_em', 'atualizado_em'),
            'classes': ('collapse',)
        })
    )

    inlines = [ResponsavelInline]

    def save_model(self, request, obj, form, change):
        if not change:
            obj.criado_por = request.user
        super().save_model(request, obj, form, change)

    def slot_badge(self, obj):
        """Número do slot ou indicação de pool"""
        if obj.slot is None:
            return format_html('<span style="color: gray;">Sem slot</span>')
        return format_html('<strong>#{}</strong>', obj.slot)

    slot_badge.short_description = 'Slot'

    def rag_badge(self, obj):
        icons = {
            'verde': '🟢',
            'ambar': '🟡',
            'vermelho': '🔴'
        }
        return icons.get(obj.rag, '')

    rag_badge.short_description = 'RAG'
