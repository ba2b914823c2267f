"""Notification catalog: kind -> (title, message)."""

from __future__ import annotations

MESSAGES: dict[str, tuple[str, str]] = {
    # Pollination outcomes
    "pumpkin_cross": (
        "Polinização Cruzada (Abóbora) 🐝",
        "Graças às abelhas, o pólen viajou de uma flor para outra! "
        "Isso garante maior diversidade genética.",
    ),
    "sunflower_cross": (
        "Polinização Cruzada (Girassol) 🐝🌻",
        "As abelhas levaram o pólen entre os girassóis e um novo broto surgiu!",
    ),
    "apple_cross": (
        "Polinização Cruzada (Maçã) 🐝🍎",
        "As abelhas viajaram pelo pomar e polinizaram suas macieiras com sucesso!",
    ),
    "corn_cross": (
        "Polinização do Milho",
        "O cruzamento do milho ocorre principalmente pela polinização cruzada, "
        "impulsionada pelo vento.",
    ),
    "manual_cross": (
        "Polinização Manual 🖌️",
        "Você transferiu o pólen à mão e um novo broto foi gerado.",
    ),
    "pumpkin_self": (
        "Auto-polinização (Abóbora)",
        "Sem abelhas ou parceiros por perto, a planta realizou a auto-fecundação "
        "após um tempo. Isso aumenta a chance de depressão endogâmica "
        "(plantas menores e mais fracas).",
    ),
    "sunflower_self": (
        "Auto-polinização (Girassol)",
        "Sem abelhas ou parceiros por perto, o girassol se auto-fecundou. "
        "Isso aumenta a chance de depressão endogâmica.",
    ),
    "inbreeding": (
        "Depressão Endogâmica 🧬",
        "Sua planta diminuiu! O cruzamento entre parentes próximos ou "
        "auto-fecundação aumentou a homozigose, levando a perda de vigor "
        "e produtividade.",
    ),
    "heterosis": (
        "Vigor Híbrido (Heterose) 🚀",
        "Sua planta cresceu mais forte! O cruzamento entre duas linhagens puras "
        "(pequenas) diferentes gerou um híbrido vigoroso e maior que os pais!",
    ),
    # Rejections
    "no_space": (
        "Sem Espaço!",
        "Não há lote livre para o novo broto. Colha algumas plantas para abrir espaço.",
    ),
    "invalid_pollination": (
        "Polinização Inválida",
        "O pólen só fecunda uma planta adulta da mesma espécie.",
    ),
    "apple_incompatible": (
        "Autoincompatibilidade (Maçã) 🍎🚫",
        "Macieiras rejeitam o próprio pólen e o de parentes diretos "
        "(autoincompatibilidade gametofítica). Nenhum fruto foi formado.",
    ),
    # Weather and bees
    "no_corn": (
        "Vento sem Milho 🌬️",
        "O vento está soprando, mas não há pelo menos dois pés de milho adultos "
        "para polinizar.",
    ),
    "corn_hint": (
        "Dica do Milho 🌽",
        "Deseja plantar outra muda de milho? O milho prefere a fecundação cruzada. "
        "Sozinho ele tem dificuldade de se reproduzir.",
    ),
    "bee_death": (
        "Alerta Ambiental ⚠️",
        "O uso de agrotóxicos afeta abelhas causando mortalidade, alterando seu "
        "comportamento e prejudicando a colônia.",
    ),
    # Beans
    "bean_nitrogen": (
        "Fixação de Nitrogênio 🫘",
        "As raízes do feijão se associam a bactérias que fixam o nitrogênio do ar. "
        "A planta ficou mais vigorosa!",
    ),
    "bean_self": (
        "Autopolinização (Feijão)",
        "O feijão é autógamo: a flor se fecunda antes mesmo de abrir, "
        "sem perda de vigor.",
    ),
    "green_manure_tip": (
        "Dica: Adubação Verde 🌿",
        "Os restos do feijão colhido podem ser incorporados ao solo como adubo verde.",
    ),
    "green_manure": (
        "Adubação Verde Aplicada 🌿",
        "O nitrogênio do feijão enriqueceu o solo das plantas vizinhas.",
    ),
}


def message_for(kind: str) -> tuple[str, str]:
    """Title and message for a notification kind."""
    return MESSAGES[kind]
