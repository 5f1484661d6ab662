"""
Embedded first-aid triage graph (TCCC / Red Cross style, Spanish).

Built once at import into a read-only mapping and validated immediately, so a
malformed graph fails at load time rather than mid-session.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from .schema import BranchNode, LeafNode, NodeResult, Option, Severity
from .validator import validate_tree


def _opt(label: str, next_id: str, style: str = "neutral") -> Option:
    return Option(label=label, next_id=next_id, style=style)


def _branch(node_id: str, question: str, *options: Option) -> BranchNode:
    return BranchNode(id=node_id, question=question, options=tuple(options))


def _leaf(node_id: str, question: str, title: str, severity: Severity, content: str, action_item: str) -> LeafNode:
    return LeafNode(
        id=node_id,
        question=question,
        result=NodeResult(title=title, severity=severity, content=content, action_item=action_item),
    )


_NODES: Tuple[BranchNode | LeafNode, ...] = (
    _branch(
        "ROOT",
        "EVALUACIÓN PRIMARIA: ¿Cuál es la situación más evidente?",
        _opt("No estoy seguro / Evaluación General", "PRIMARY_SURVEY"),
        _opt("Sangrado Masivo / Trauma", "BLEEDING_CHECK", "danger"),
        _opt("Inconsciente / No Respira", "AIRWAY_CHECK", "danger"),
        _opt("Quemaduras (Fuego/Química)", "BURN_CHECK", "danger"),
        _opt("Huesos Rotos / Golpe Cabeza", "TRAUMA_CHECK"),
        _opt("Reacción Alérgica / Hinchazón", "ALLERGY_CHECK", "danger"),
        _opt("Clima (Frío/Calor Extremo)", "ENV_CHECK"),
        _opt("Picadura / Veneno", "TOXIN_CHECK"),
    ),
    _leaf(
        "PRIMARY_SURVEY",
        "Protocolo de Evaluación General (XABCDE)",
        "REGLA X-A-B-C",
        "WARNING",
        "Sigue este orden estricto:\n"
        "1. X (Exsanguination): Busca y para sangrados masivos primero.\n"
        "2. A (Airway): ¿Vía aérea abierta? (Háblale).\n"
        "3. B (Breathing): ¿Respira? (Mira el pecho).\n"
        "4. C (Circulation): ¿Tiene pulso?\n"
        "5. D (Disability): ¿Se mueve o habla?",
        "CHEQUEAR X-A-B-C",
    ),
    # Bleeding (MARCH)
    _branch(
        "BLEEDING_CHECK",
        "¿El sangrado es en una extremidad y sale a chorros?",
        _opt("Desconocido / No distingo", "PRESSURE_APPLY"),
        _opt("SÍ, rojo brillante/pulsátil", "TOURNIQUET_APPLY", "danger"),
        _opt("NO, es continuo/oscuro", "PRESSURE_APPLY"),
        _opt("Es en el Torso/Cuello/Ingle", "PACKING_CHECK", "danger"),
    ),
    _leaf(
        "TOURNIQUET_APPLY",
        "Arteria comprometida.",
        "APLICAR TORNIQUETE",
        "CRITICAL",
        "1. Coloca el torniquete 5-7 cm POR ENCIMA de la herida (nunca en articulación).\n"
        "2. Aprieta hasta que el sangrado PARE totalmente.\n"
        "3. Escribe la hora en la frente.\n"
        "4. NO lo aflojes.",
        "APLICAR AHORA",
    ),
    _leaf(
        "PRESSURE_APPLY",
        "Sangrado controlable.",
        "PRESIÓN DIRECTA",
        "WARNING",
        "1. Aplica presión fuerte sobre la herida con tela limpia.\n"
        "2. Mantén 10 min sin levantar.\n"
        "3. Venda compresivo.\n"
        "4. Eleva la extremidad si es posible.",
        "PRESIONAR",
    ),
    _branch(
        "PACKING_CHECK",
        "¿Herida en zona de unión (cuello, axila, ingle)?",
        _opt("Desconocido", "WOUND_PACKING"),
        _opt("SÍ (Unión)", "WOUND_PACKING", "danger"),
        _opt("Es en el Pecho/Espalda", "CHEST_SEAL", "danger"),
    ),
    _leaf(
        "WOUND_PACKING",
        "Empaquetamiento.",
        "EMPAQUETAR HERIDA",
        "CRITICAL",
        "1. Mete gasa/tela DENTRO del agujero hasta tocar hueso.\n"
        "2. Rellena a tope.\n"
        "3. Presiona encima con fuerza (3-10 min).\n"
        "4. NO empaquetar en pecho ni abdomen.",
        "RELLENAR HERIDA",
    ),
    _leaf(
        "CHEST_SEAL",
        "Neumotórax.",
        "SELLO TORÁCICO",
        "CRITICAL",
        "1. Tapa el agujero con plástico al exhalar.\n"
        "2. Pega 3 lados (deja 1 libre para salida de aire).\n"
        "3. Busca herida de salida en espalda.",
        "SELLAR TÓRAX",
    ),
    # Burns
    _branch(
        "BURN_CHECK",
        "¿Origen y gravedad de la quemadura?",
        _opt("Desconocido / Duda", "BURN_COOL"),
        _opt("Fuego / Calor (Piel roja/ampollas)", "BURN_COOL"),
        _opt("Química (Líquido/Polvo)", "BURN_CHEM", "danger"),
        _opt("Ropa pegada a la piel", "BURN_STUCK", "danger"),
    ),
    _leaf(
        "BURN_COOL",
        "Quemadura térmica.",
        "ENFRIAR ZONA",
        "WARNING",
        "1. Aplica agua templada/fría (NO HELADA) por 20 min.\n"
        "2. Cubre con film transparente o tela limpia húmeda.\n"
        "3. NO rompas ampollas.\n"
        "4. NO apliques cremas ni dentífrico.",
        "IRRIGAR AGUA",
    ),
    _leaf(
        "BURN_CHEM",
        "Quemadura química.",
        "LAVADO MASIVO",
        "CRITICAL",
        "1. Si es polvo, cepilla antes de mojar.\n"
        "2. Lava con chorro de agua continuo durante 30-60 min.\n"
        "3. Retira ropa contaminada con cuidado.\n"
        "4. Protege tus ojos.",
        "LAVAR 30 MIN",
    ),
    _leaf(
        "BURN_STUCK",
        "Ropa adherida.",
        "NO TIRAR",
        "WARNING",
        "1. NO arranques la ropa pegada (arrancarás piel).\n"
        "2. Corta la ropa alrededor de la zona pegada.\n"
        "3. Enfría sobre la ropa.\n"
        "4. Cubre sin presionar.",
        "CORTAR ALREDEDOR",
    ),
    # Trauma / fractures
    _branch(
        "TRAUMA_CHECK",
        "¿Tipo de Trauma?",
        _opt("Desconocido", "HEAD_TRAUMA"),
        _opt("Golpe en la Cabeza / Confusión", "HEAD_TRAUMA", "danger"),
        _opt("Hueso asoma (Fractura Abierta)", "OPEN_FRACTURE", "danger"),
        _opt("Deformidad / Dolor extremidad", "CLOSED_FRACTURE"),
        _opt("Lesión en Ojo", "EYE_TRAUMA"),
    ),
    _leaf(
        "HEAD_TRAUMA",
        "Traumatismo Craneoencefálico (TCE).",
        "VIGILANCIA TCE",
        "CRITICAL",
        "1. Si inconsciente: Posición lateral (si no hay daño cuello).\n"
        "2. Controla vómitos.\n"
        "3. Pupilas desiguales = Peligro extremo.\n"
        "4. NO dejar dormir si hay confusión progresiva.",
        "MONITORIZAR CONSCIENCIA",
    ),
    _leaf(
        "EYE_TRAUMA",
        "Trauma Ocular.",
        "PROTEGER OJO",
        "WARNING",
        "1. Si hay objeto clavado: NO LO SAQUES.\n"
        "2. Cubre AMBOS ojos (para evitar que mueva el malo).\n"
        "3. Si es químico: lavar 15 min.\n"
        "4. No frotar.",
        "CUBRIR AMBOS",
    ),
    _leaf(
        "OPEN_FRACTURE",
        "Hueso expuesto.",
        "FRACTURA ABIERTA",
        "CRITICAL",
        "1. NO meter el hueso.\n"
        "2. Controlar sangrado alrededor.\n"
        "3. Cubrir con apósito húmedo.\n"
        "4. Inmovilizar como se encuentre.",
        "INMOVILIZAR",
    ),
    _leaf(
        "CLOSED_FRACTURE",
        "Fractura cerrada.",
        "FERULIZAR",
        "INFO",
        "1. Inmoviliza articulación por encima y debajo.\n"
        "2. Usa ramas/cartón y venda.\n"
        "3. Comprueba pulso/color dedos cada 15 min.",
        "ENTABLILLAR",
    ),
    # Allergy
    _branch(
        "ALLERGY_CHECK",
        "¿Dificultad respiratoria o hinchazón de cara/lengua?",
        _opt("Desconocido / Leve picor", "ALLERGY_MILD"),
        _opt("SÍ (Anafilaxia)", "ANAPHYLAXIS", "danger"),
        _opt("Solo ronchas en piel", "ALLERGY_MILD"),
    ),
    _leaf(
        "ANAPHYLAXIS",
        "Shock Anafiláctico.",
        "USAR EPI-PEN",
        "CRITICAL",
        "1. Si tiene autoinyector (Adrenalina), ÚSALO YA en muslo externo.\n"
        "2. Posición: Tumbado piernas arriba (si respira bien) o sentado (si se ahoga).\n"
        "3. Si no mejora en 5 min, segunda dosis.",
        "ADRENALINA YA",
    ),
    _leaf(
        "ALLERGY_MILD",
        "Alergia leve.",
        "ANTIHISTAMÍNICO",
        "INFO",
        "1. Alejar del alérgeno.\n"
        "2. Tomar antihistamínico oral si disponible.\n"
        "3. Vigilar respiración por si empeora.\n"
        "4. Compresas frías para picor.",
        "OBSERVAR",
    ),
    # Airway / breathing
    _branch(
        "AIRWAY_CHECK",
        "¿Responde a la voz o dolor?",
        _opt("Desconocido", "BREATHING_LOOK"),
        _opt("SÍ responde", "RECOVERY_POS", "safe"),
        _opt("NO responde", "BREATHING_LOOK", "danger"),
    ),
    _branch(
        "BREATHING_LOOK",
        "¿El pecho se mueve? ¿Sientes aire?",
        _opt("No estoy seguro", "RECOVERY_POS"),
        _opt("SÍ respira", "RECOVERY_POS", "safe"),
        _opt("NO respira / Boquea", "START_CPR", "danger"),
    ),
    _leaf(
        "START_CPR",
        "Paro Cardíaco.",
        "RCP (30:2)",
        "CRITICAL",
        "1. Centro del pecho.\n"
        "2. Comprime fuerte y rápido (100-120/min).\n"
        "3. Hunde 5cm el pecho.\n"
        "4. NO PARES hasta que reviva o llegue ayuda.",
        "COMPRIMIR PECHO",
    ),
    _leaf(
        "RECOVERY_POS",
        "Inconsciente pero respira.",
        "POSICIÓN LATERAL",
        "INFO",
        "1. Tumba de lado para que no se ahogue con vómito.\n"
        "2. Extiende cuello.\n"
        "3. Revisa respiración cada minuto.",
        "PROTEGER VÍA AÉREA",
    ),
    # Environment
    _branch(
        "ENV_CHECK",
        "Exposición Térmica.",
        _opt("Desconocido", "GENERAL_STABILIZE"),
        _opt("Frío / Hipotermia", "HYPOTHERMIA"),
        _opt("Calor / Golpe de Calor", "HEATSTROKE"),
    ),
    _leaf(
        "GENERAL_STABILIZE",
        "Entorno.",
        "REFUGIO",
        "INFO",
        "1. Aísla del suelo.\n"
        "2. Protege del viento/lluvia.\n"
        "3. Mantén temperatura estable.",
        "ESTABILIZAR",
    ),
    _leaf(
        "HYPOTHERMIA",
        "Hipotermia.",
        "CALOR PASIVO",
        "WARNING",
        "1. Quitar ropa mojada.\n"
        "2. Piel con piel.\n"
        "3. Bebida tibia (si consciente).\n"
        "4. NO frotar.",
        "CALENTAR LENTO",
    ),
    _branch(
        "HEATSTROKE",
        "¿Piel seca y muy caliente?",
        _opt("Desconocido", "HEAT_EXHAUST"),
        _opt("SÍ (No suda)", "HEATSTROKE_ACT", "danger"),
        _opt("NO (Suda mucho)", "HEAT_EXHAUST"),
    ),
    _leaf(
        "HEATSTROKE_ACT",
        "Golpe de Calor.",
        "ENFRIAR RÁPIDO",
        "CRITICAL",
        "1. Agua en cuerpo.\n"
        "2. Abanicar.\n"
        "3. Hielo en axilas/ingles.\n"
        "4. EVACUAR.",
        "BAJAR TEMP",
    ),
    _leaf(
        "HEAT_EXHAUST",
        "Agotamiento.",
        "HIDRATAR",
        "WARNING",
        "1. Sombra.\n"
        "2. Agua con sal a sorbos.\n"
        "3. Elevar piernas.",
        "DESCANSAR",
    ),
    # Toxins
    _branch(
        "TOXIN_CHECK",
        "Contacto Tóxico.",
        _opt("Desconocido", "GENERAL_TOXIN"),
        _opt("Picadura (Serpiente/Araña)", "BITE_TREAT", "danger"),
        _opt("Ingesta", "POISON_INGEST", "danger"),
    ),
    _leaf(
        "BITE_TREAT",
        "Venenos.",
        "INMOVILIZAR",
        "WARNING",
        "1. NO chupar.\n"
        "2. Miembro bajo nivel corazón.\n"
        "3. Lavar herida.\n"
        "4. Marcar hinchazón.",
        "QUIETO",
    ),
    _leaf(
        "POISON_INGEST",
        "Ingestión.",
        "NO VOMITAR",
        "WARNING",
        "1. NO provocar vómito.\n"
        "2. Guardar muestra.\n"
        "3. Carbón activado si hay.",
        "DILUIR",
    ),
    _leaf(
        "GENERAL_TOXIN",
        "General.",
        "SOPORTE",
        "INFO",
        "1. Lavar zona.\n"
        "2. Vigilar respiración.\n"
        "3. Retirar joyas.",
        "OBSERVAR",
    ),
)


def _build(nodes) -> Mapping[str, BranchNode | LeafNode]:
    table: Dict[str, BranchNode | LeafNode] = {}
    for node in nodes:
        if node.id in table:
            raise ValueError(f"duplicate node id: {node.id}")
        table[node.id] = node
    return MappingProxyType(table)


MEDICAL_DECISION_TREE: Mapping[str, BranchNode | LeafNode] = _build(_NODES)

validate_tree(MEDICAL_DECISION_TREE)
