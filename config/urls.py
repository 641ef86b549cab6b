# config/urls.py

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from django.views.generic import RedirectView

urlpatterns = [
    # Admin (também é a tela de login)
    path('admin/', admin.site.urls),

    # Aplicações principais
    path('iniciativas/', include('apps.iniciativas.urls')),

    # Redirecionamentos úteis
    path('', RedirectView.as_view(pattern_name='iniciativas:slots', permanent=False)),
]

# Servir arquivos estáticos em desenvolvimento
if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
