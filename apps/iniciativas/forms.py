# apps/iniciativas/forms.py

from django import forms

from apps.core.models import Equipe, Pessoa
from .filtros import FiltrosSlots
from .models import Iniciativa


class FiltrosSlotsForm(forms.Form):
    """Filtros do quadro (query string: ?equipes=1&equipes=2&pessoas=5)"""

    equipes = forms.ModelMultipleChoiceField(
        label='Equipes',
        queryset=Equipe.objects.none(),
        required=False,
        widget=forms.SelectMultiple(attrs={'class': 'form-select w-full'})
    )

    pessoas = forms.ModelMultipleChoiceField(
        label='Responsáveis',
        queryset=Pessoa.objects.none(),
        required=False,
        widget=forms.SelectMultiple(attrs={'class': 'form-select w-full'})
    )

    def __init__(self, *args, organizacao_id=None, **kwargs):
        super().__init__(*args, **kwargs)
        # Só equipes/pessoas da própria organização
        self.fields['equipes'].queryset = Equipe.objects.filter(organizacao_id=organizacao_id)
        self.fields['pessoas'].queryset = Pessoa.objects.filter(organizacao_id=organizacao_id)

    def to_filtros(self):
        if not self.is_valid():
            return FiltrosSlots()
        return FiltrosSlots.criar(
            (equipe.pk for equipe in self.cleaned_data['equipes']),
            (pessoa.pk for pessoa in self.cleaned_data['pessoas']),
        )


class AtribuirSlotForm(forms.Form):
    iniciativa_id = forms.IntegerField(min_value=1)
    numero_slot = forms.IntegerField(min_value=1)


class RemoverSlotForm(forms.Form):
    iniciativa_id = forms.IntegerField(min_value=1)


class TrocarSlotForm(forms.Form):
    iniciativa_id = forms.IntegerField(min_value=1)
    numero_slot = forms.IntegerField(min_value=1)
    iniciativa_alvo_id = forms.IntegerField(min_value=1, required=False)


class StatusIniciativaForm(forms.Form):
    status = forms.ChoiceField(choices=Iniciativa.STATUS_CHOICES)


def primeiro_erro(form):
    """Primeira mensagem de erro do form, para o envelope JSON"""
    for campo, erros in form.errors.items():
        if campo == '__all__':
            return erros[0]
        return f'{campo}: {erros[0]}'
    return 'Parâmetros inválidos'
