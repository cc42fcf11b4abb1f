# src/prompts/templates.py — v1
"""Fixed instruction text for glucose-curve analysis, per language."""

from __future__ import annotations

GLUCOSE_ANALYSIS_PROMPT_EN = """Analyze this blood glucose curve. Please provide:

1. **Overall Summary**: A general assessment of the glycemic control shown in the chart.

2. **Observed Levels**:
   - Identify periods of hyperglycemia (high glucose)
   - Identify periods of hypoglycemia (low glucose)
   - Identify periods within the target range (usually 70-180 mg/dL)

3. **Patterns and Trends**:
   - Glycemic variability (stability vs. fluctuations)
   - Meal-related patterns (if visible)
   - Critical times of day

4. **Recommendations**:
   - Suggestions to improve control
   - Possible adjustments to diet or medication (state that these must be discussed with a physician)
   - Priority focus areas

Please be specific and detailed in your analysis. Remember that this analysis is informational and does not replace an evaluation by a healthcare professional."""

GLUCOSE_ANALYSIS_PROMPT_ES = """Analiza esta curva de glucosa en sangre. Por favor proporciona:

1. **Resumen General**: Una evaluación general del control glucémico mostrado en la gráfica.

2. **Niveles Observados**:
   - Identificar períodos de hiperglucemia (glucosa alta)
   - Identificar períodos de hipoglucemia (glucosa baja)
   - Identificar períodos en rango objetivo (normalmente 70-180 mg/dL)

3. **Patrones y Tendencias**:
   - Variabilidad glucémica (estabilidad vs. fluctuaciones)
   - Patrones relacionados con comidas (si son visibles)
   - Momentos críticos del día

4. **Recomendaciones**:
   - Sugerencias para mejorar el control
   - Posibles ajustes en alimentación o medicación (mencionar que deben consultarse con un médico)
   - Áreas de enfoque prioritario

Por favor, sé específico y detallado en tu análisis. Recuerda que este análisis es informativo y no sustituye la evaluación de un profesional de la salud."""

PROMPTS_BY_LANGUAGE: dict[str, str] = {
    "en": GLUCOSE_ANALYSIS_PROMPT_EN,
    "es": GLUCOSE_ANALYSIS_PROMPT_ES,
}
