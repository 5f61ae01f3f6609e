"""
Therapist-Approved Intervention Catalog

Static techniques grouped by type, each tagged with the session
trigger categories it applies to ("general" = any category).

CLINICAL_REVIEW_REQUIRED: Technique wording and trigger tags
must be reviewed by a licensed clinician before changes ship.
"""

from typing import Optional

from serene.domain.enums.intervention_type import InterventionType
from serene.domain.models.intervention import Intervention


INTERVENTIONS: tuple[Intervention, ...] = (
    # Grounding
    Intervention(
        id="54321",
        type=InterventionType.GROUNDING,
        name={
            "en": "5-4-3-2-1 Technique",
            "es": "Técnica 5-4-3-2-1",
            "pt": "Técnica 5-4-3-2-1",
        },
        description={
            "en": "Name 5 things you can see, 4 things you can touch, 3 things you can hear, 2 things you can smell, and 1 thing you can taste.",
            "es": "Nombra 5 cosas que puedas ver, 4 cosas que puedas tocar, 3 cosas que puedas oír, 2 cosas que puedas oler y 1 cosa que puedas saborear.",
            "pt": "Nomeie 5 coisas que você pode ver, 4 coisas que pode tocar, 3 coisas que pode ouvir, 2 coisas que pode cheirar e 1 coisa que pode provar.",
        },
        for_triggers=("general", "panic", "work", "social"),
        voice_prompt={
            "en": "Let's try a grounding exercise together. Look around and name five things you can see right now.",
            "es": "Intentemos un ejercicio de conexión con el presente. Mira a tu alrededor y nombra cinco cosas que puedas ver ahora mismo.",
            "pt": "Vamos tentar um exercício de aterramento juntos. Olhe ao redor e nomeie cinco coisas que você pode ver agora.",
        },
    ),
    Intervention(
        id="body_scan",
        type=InterventionType.GROUNDING,
        name={
            "en": "Body Scan",
            "es": "Escaneo Corporal",
            "pt": "Escaneamento Corporal",
        },
        description={
            "en": "Mentally scan your body from head to toe, noting any sensations without judgment.",
            "es": "Escanea mentalmente tu cuerpo de la cabeza a los pies, notando cualquier sensación sin juzgarla.",
            "pt": "Mentalmente, escaneie seu corpo da cabeça aos pés, notando qualquer sensação sem julgamento.",
        },
        for_triggers=("general", "health", "trauma"),
        voice_prompt={
            "en": "Let's do a body scan together. Start by focusing on the top of your head and notice any sensations there.",
            "es": "Hagamos un escaneo corporal juntos. Comienza por concentrarte en la parte superior de tu cabeza y nota cualquier sensación allí.",
            "pt": "Vamos fazer um escaneamento corporal juntos. Comece focando no topo da sua cabeça e perceba quaisquer sensações lá.",
        },
    ),
    # Breathing
    Intervention(
        id="box_breathing",
        type=InterventionType.BREATHING,
        name={
            "en": "Box Breathing",
            "es": "Respiración Cuadrada",
            "pt": "Respiração Quadrada",
        },
        description={
            "en": "Inhale for 4 counts, hold for 4 counts, exhale for 4 counts, hold for 4 counts. Repeat.",
            "es": "Inhala durante 4 tiempos, mantén durante 4 tiempos, exhala durante 4 tiempos, mantén durante 4 tiempos. Repite.",
            "pt": "Inspire por 4 tempos, segure por 4 tempos, expire por 4 tempos, segure por 4 tempos. Repita.",
        },
        for_triggers=("general", "work", "uncertainty"),
        voice_prompt={
            "en": "Let's try box breathing together. I'll guide you through each step. First, let's inhale slowly for 4 counts.",
            "es": "Intentemos la respiración cuadrada juntos. Te guiaré a través de cada paso. Primero, inhalemos lentamente durante 4 tiempos.",
            "pt": "Vamos tentar a respiração quadrada juntos. Vou guiá-lo por cada etapa. Primeiro, vamos inspirar lentamente por 4 tempos.",
        },
    ),
    Intervention(
        id="478_breathing",
        type=InterventionType.BREATHING,
        name={
            "en": "4-7-8 Breathing",
            "es": "Respiración 4-7-8",
            "pt": "Respiração 4-7-8",
        },
        description={
            "en": "Inhale for 4 counts, hold for 7 counts, exhale for 8 counts. Repeat.",
            "es": "Inhala durante 4 tiempos, mantén durante 7 tiempos, exhala durante 8 tiempos. Repite.",
            "pt": "Inspire por 4 tempos, segure por 7 tempos, expire por 8 tempos. Repita.",
        },
        for_triggers=("general", "health", "financial"),
        voice_prompt={
            "en": "Let's practice the 4-7-8 breathing technique. First, exhale completely through your mouth.",
            "es": "Practiquemos la técnica de respiración 4-7-8. Primero, exhala completamente por la boca.",
            "pt": "Vamos praticar a técnica de respiração 4-7-8. Primeiro, expire completamente pela boca.",
        },
    ),
    # Cognitive
    Intervention(
        id="thought_challenge",
        type=InterventionType.COGNITIVE,
        name={
            "en": "Thought Challenging",
            "es": "Desafío de Pensamientos",
            "pt": "Desafio de Pensamentos",
        },
        description={
            "en": "Identify negative thoughts and challenge them with evidence.",
            "es": "Identifica pensamientos negativos y desafíalos con evidencia.",
            "pt": "Identifique pensamentos negativos e desafie-os com evidências.",
        },
        for_triggers=("general", "social", "work", "uncertainty"),
        voice_prompt={
            "en": "Let's work on challenging a negative thought. What's one thought that's causing you anxiety right now?",
            "es": "Trabajemos en desafiar un pensamiento negativo. ¿Cuál es un pensamiento que te está causando ansiedad ahora mismo?",
            "pt": "Vamos trabalhar em desafiar um pensamento negativo. Qual é um pensamento que está lhe causando ansiedade agora?",
        },
    ),
    Intervention(
        id="worry_time",
        type=InterventionType.COGNITIVE,
        name={
            "en": "Scheduled Worry Time",
            "es": "Tiempo Programado para Preocuparse",
            "pt": "Tempo Programado para Preocupações",
        },
        description={
            "en": "Set aside a specific time each day to address worries, postponing them until then.",
            "es": "Reserva un tiempo específico cada día para abordar preocupaciones, posponiéndolas hasta entonces.",
            "pt": "Reserve um horário específico todos os dias para lidar com preocupações, adiando-as até lá.",
        },
        for_triggers=("general", "financial", "health", "uncertainty"),
        voice_prompt={
            "en": "Let's set up a scheduled worry time. When would be a good 15-minute period in your day to focus on your worries?",
            "es": "Vamos a establecer un tiempo programado para preocuparte. ¿Cuándo sería un buen período de 15 minutos en tu día para concentrarte en tus preocupaciones?",
            "pt": "Vamos estabelecer um tempo programado para preocupações. Quando seria um bom período de 15 minutos no seu dia para focar em suas preocupações?",
        },
    ),
    # Mindfulness
    Intervention(
        id="present_moment",
        type=InterventionType.MINDFULNESS,
        name={
            "en": "Present Moment Awareness",
            "es": "Conciencia del Momento Presente",
            "pt": "Consciência do Momento Presente",
        },
        description={
            "en": "Focus your attention fully on the present moment, observing thoughts and sensations without judgment.",
            "es": "Centra tu atención completamente en el momento presente, observando pensamientos y sensaciones sin juzgar.",
            "pt": "Concentre sua atenção totalmente no momento presente, observando pensamentos e sensações sem julgamento.",
        },
        for_triggers=("general", "uncertainty", "work", "social"),
        voice_prompt={
            "en": "Let's practice being fully in the present moment. Focus on what you can sense right now in this moment.",
            "es": "Practiquemos estar completamente en el momento presente. Concéntrate en lo que puedes sentir ahora mismo en este momento.",
            "pt": "Vamos praticar estar totalmente no momento presente. Concentre-se no que você pode sentir agora neste momento.",
        },
    ),
    # Physical
    Intervention(
        id="progressive_relaxation",
        type=InterventionType.PHYSICAL,
        name={
            "en": "Progressive Muscle Relaxation",
            "es": "Relajación Muscular Progresiva",
            "pt": "Relaxamento Muscular Progressivo",
        },
        description={
            "en": "Tense and then release each muscle group in your body, from toes to head, to release physical tension.",
            "es": "Tensa y luego relaja cada grupo muscular en tu cuerpo, desde los dedos de los pies hasta la cabeza, para liberar la tensión física.",
            "pt": "Tensione e depois solte cada grupo muscular do seu corpo, dos dedos dos pés à cabeça, para liberar a tensão física.",
        },
        for_triggers=("general", "health", "trauma", "sleep"),
        voice_prompt={
            "en": "Let's try progressive muscle relaxation. Start by tensing the muscles in your feet for 5 seconds, then release and notice the difference.",
            "es": "Probemos la relajación muscular progresiva. Comienza tensando los músculos de tus pies durante 5 segundos, luego suelta y nota la diferencia.",
            "pt": "Vamos tentar o relaxamento muscular progressivo. Comece tensionando os músculos dos seus pés por 5 segundos, depois solte e perceba a diferença.",
        },
    ),
)

# Returned when every selection branch comes up empty
DEFAULT_INTERVENTION_ID = "box_breathing"


def get_intervention(intervention_id: Optional[str]) -> Optional[Intervention]:
    """Look up a technique by id."""
    for intervention in INTERVENTIONS:
        if intervention.id == intervention_id:
            return intervention
    return None


def interventions_by_type() -> dict[InterventionType, list[Intervention]]:
    """Catalog grouped by technique type, in catalog order."""
    grouped: dict[InterventionType, list[Intervention]] = {t: [] for t in InterventionType}
    for intervention in INTERVENTIONS:
        grouped[intervention.type].append(intervention)
    return grouped
