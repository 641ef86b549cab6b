# apps/iniciativas/routing.py

from django.urls import re_path
from . import consumers

# Rotas WebSocket do quadro de slots
websocket_urlpatterns = [
    # Um quadro por organização (organização vem do usuário logado)
    re_path(r'ws/iniciativas/slots/$', consumers.QuadroSlotsConsumer.as_asgi()),
]
