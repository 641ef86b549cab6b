# apps/iniciativas/urls.py

from django.urls import path
from . import views

app_name = 'iniciativas'

urlpatterns = [
    # Quadro de slots
    path('slots/', views.quadro_slots_view, name='slots'),

    # Seletor de iniciativas para slot vazio
    path('slots/<int:numero_slot>/seletor/', views.seletor_slot_modal, name='seletor_slot'),
    path('slots/sem-slot/', views.buscar_sem_slot, name='buscar_sem_slot'),

    # AJAX/HTMX - Mutações de slot
    path('slots/atribuir/', views.atribuir_slot_ajax, name='atribuir_slot'),
    path('slots/remover/', views.remover_slot_ajax, name='remover_slot'),
    path('slots/trocar/', views.trocar_slots_ajax, name='trocar_slots'),

    # Status (concluir/cancelar libera o slot)
    path('<int:iniciativa_id>/status/', views.atualizar_status_ajax, name='atualizar_status'),
]
