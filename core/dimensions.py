# core/dimensions.py
"""
Dimension definitions. Data only: every entry is consumed by the one
classification flow in core.classification_flow.
"""
from typing import Tuple
from core.schema import Category, ClassificationSchema
from util.enums import Cardinality


def _cats(*pairs: Tuple[str, str]) -> Tuple[Category, ...]:
    return tuple(Category(token, definition) for token, definition in pairs)


SUBJECT_LEVEL = ClassificationSchema(
    field_name="subjectLevel",
    label="Subject Level",
    task="identify the educational level of the research subjects in the given paper.",
    cardinality=Cardinality.SINGLE,
    output_description="The identified educational level of the research subjects.",
    categories=_cats(
        ("K12", "subjects who are in or have completed elementary, middle school, or high school."),
        ("HigherEd", "subjects who are in or have completed any post-secondary study (undergraduate + graduate)."),
        ("Graduate", "subjects who are in or have completed post-bachelor's study (Master's, PhD, professional programs)."),
        ("DoctoralPlus", "subjects who have completed postgraduate training, but not a formal degree."),
        ("Teacher", "subjects who are teachers (use this if the paper only says \"teachers\" without specifying their education level)."),
        ("NotApplicable", "if the research does not involve human subjects or their educational level is not mentioned."),
    ),
    not_reported="NotApplicable",
)

PARTICIPANTS_GROUP = ClassificationSchema(
    field_name="participantsGroup",
    label="Participants Group",
    task="identify the Participants_Group of the research subjects in the given paper.",
    cardinality=Cardinality.SINGLE,
    output_description="The identified group of the research participants.",
    preamble="Participants_Group refers to the type of research subjects in the study.",
    categories=_cats(
        ("Students", "participants are only students."),
        ("Teacher", "participants are only teachers."),
        ("Mixed", "participants include both students and teachers, or other combinations."),
    ),
)

DISCIPLINE = ClassificationSchema(
    field_name="discipline",
    label="Discipline",
    task="identify the discipline of the research subjects in the given paper.",
    cardinality=Cardinality.SINGLE,
    output_description="The identified discipline of the research paper.",
    categories=_cats(
        ("STEM", "science, technology, engineering, mathematics."),
        ("Medical", "medicine, health, nursing, or healthcare-related fields."),
        ("Social Science", "humanities, social sciences, law, management, or arts."),
        ("Multidisciplinary Studies", "interdisciplinary or mixed fields."),
        ("Others", "does not fit in the above categories."),
    ),
)

SUB_DISCIPLINE = ClassificationSchema(
    field_name="subDiscipline",
    label="Sub-discipline",
    task="identify the discipline_sub of the research subjects in the given paper.",
    cardinality=Cardinality.FREE_TEXT_MULTI,
    output_description="The identified sub-discipline(s) of the research subjects.",
    separator=",",
    preamble=(
        "Discipline is the main field of study or subject area that the research participants "
        "belong to (STEM, Medical, Social Science, Multidisciplinary, or other). Discipline_sub are "
        "optional fine labels describing that discipline, such as mechanical engineering, law, or nursing."
    ),
    rules=("Use the paper's own wording for each sub-discipline.",),
)

COUNTRY_OR_REGION = ClassificationSchema(
    field_name="countryOrRegion",
    label="Country or Region",
    task="identify the Country_or_Region of the research participants in the given paper.",
    cardinality=Cardinality.FREE_TEXT_MULTI,
    output_description="The identified country or region of the research participants.",
    separator=";",
    preamble=(
        "Country_or_Region refers to the country or geographical region where the research "
        "participants come from."
    ),
    rules=("Write country names in English.",),
)

SAMPLE_SIZE = ClassificationSchema(
    field_name="sampleSize",
    label="Sample Size (N)",
    task="identify the sample size (N) of the research subjects in the given paper.",
    cardinality=Cardinality.NUMERIC,
    output_description="The identified sample size (N) of the research participants.",
    rules=("Report the total number of participants across all groups.",),
)

DESIGN_TYPE = ClassificationSchema(
    field_name="designType",
    label="Design Type",
    task="identify the research design type reported in the given paper.",
    cardinality=Cardinality.SINGLE,
    output_description="The identified research design type of the research paper.",
    categories=_cats(
        ("Exp", "Experimental study."),
        ("Quasi", "Quasi-experimental study."),
        ("PrePost", "Pre-test/Post-test design."),
        ("CrossSection", "Cross-sectional study."),
        ("Case", "Case study."),
        ("Mixed", "Mixed-methods study."),
        ("Conceptual", "Conceptual or theoretical study."),
    ),
)

EVIDENCE_STRENGTH = ClassificationSchema(
    field_name="evidenceStrength",
    label="Evidence Strength",
    task="identify the strength of evidence reported in the given paper.",
    cardinality=Cardinality.SINGLE,
    output_description="The identified evidence strength of the research paper.",
    categories=_cats(
        ("A", "Experimental, Quasi-experimental, Pre-post, or Control study designs."),
        ("B", "Quantitative or Mixed-methods studies."),
        ("C", "Qualitative or Descriptive studies."),
        ("D", "Conceptual studies (theoretical, no empirical data)."),
    ),
)

EMI_CONTEXT = ClassificationSchema(
    field_name="emiContext",
    label="EMI Context",
    task="identify the EMI (English as a Medium of Instruction) context in the given paper.",
    cardinality=Cardinality.SINGLE,
    output_description="The identified EMI context of the research paper.",
    categories=_cats(
        ("EFL", "English as a Foreign Language context."),
        ("ESL", "English as a Second Language context."),
        ("Mixed", "combination of EFL and ESL contexts."),
        ("Others", "any other course/project modality not covered above."),
    ),
)

INTEGRATION_MODE = ClassificationSchema(
    field_name="integrationMode",
    label="Integration Mode",
    task="identify the mode of AI integration in the given paper.",
    cardinality=Cardinality.SINGLE,
    output_description="The identified mode of AI integration in the research paper.",
    categories=_cats(
        ("Taught_Required", "AI use is required and directly taught as part of the course."),
        ("Allowed_Disclosure", "AI use is allowed, and students may disclose it."),
        ("Semi_Controlled", "AI use is partially controlled or guided by the instructor."),
        ("Restricted", "AI use is restricted or limited in the learning context."),
    ),
)

AI_TECH_TYPE = ClassificationSchema(
    field_name="aiTechType",
    label="AI Technology Type",
    task="identify the type(s) of AI technology used in the given paper.",
    cardinality=Cardinality.MULTI,
    output_description="The identified AI technology type(s) used in the research paper.",
    separator=",",
    categories=_cats(
        ("GenAI", "Generative AI tools."),
        ("MT", "Machine Translation."),
        ("ASR", "Automatic Speech Recognition."),
        ("GrammarAid", "Grammar or writing assistance tools."),
        ("Chatbot", "Chatbot or conversational AI tools."),
        ("Others", "Any other AI technology not listed above."),
    ),
)

MEASURES = ClassificationSchema(
    field_name="measures",
    label="Measures / Instruments",
    task="identify the measures or instruments used in the given paper.",
    cardinality=Cardinality.MULTI,
    output_description="The identified measures or instruments used in the research paper.",
    separator=",",
    categories=_cats(
        ("Test", "standardized or researcher-designed tests."),
        ("CAF", "corrective/accuracy/fluency metrics."),
        ("Rubric", "scoring rubrics for performance assessment."),
        ("Survey", "questionnaires or surveys."),
        ("Interview", "structured, semi-structured, or unstructured interviews."),
        ("Log", "system or learning logs."),
        ("Trace", "trace data, e.g., clickstreams, keystrokes, or digital footprints."),
        ("Obs", "observations."),
        ("PolicyDoc", "documents or policies analyzed."),
        ("Others", "any other measures not covered above."),
    ),
)

OUTCOME_CATEGORY = ClassificationSchema(
    field_name="outcomeCategory",
    label="Outcome Category",
    task="identify the outcome category(ies) reported in the given paper.",
    cardinality=Cardinality.MULTI,
    output_description="The identified outcome category(ies).",
    separator=",",
    categories=_cats(
        ("Content", "outcomes related to subject matter knowledge or understanding."),
        ("Language_Perf", "outcomes related to language performance or proficiency."),
        ("Engagement", "outcomes related to learner engagement or participation."),
        ("Affective", "outcomes related to attitudes, motivation, or emotions."),
        ("Policy_Outputs", "outcomes related to institutional or policy-level results."),
    ),
)

ETHICS_FOCUS = ClassificationSchema(
    field_name="ethicsFocus",
    label="Ethics Focus",
    task="identify the ethical focus(es) of AI intervention in the given paper.",
    cardinality=Cardinality.MULTI,
    output_description="The identified ethical focus(es) of AI intervention.",
    separator=",",
    categories=_cats(
        ("Integrity_Policy", "AI promotes academic or research integrity, following institutional policies."),
        ("Bias_Fairness", "AI addresses bias, fairness, or equity issues."),
        ("Disclosure", "AI use is disclosed or transparency is emphasized."),
        ("Detection_Appeal", "AI is used in detection systems, or subjects can appeal AI decisions."),
        ("Ethics_Education", "AI supports teaching or learning about ethics."),
        ("Inclusivity_Multilingual", "AI promotes inclusivity or supports multiple languages."),
    ),
)

INTERVENTION_ROLES = ClassificationSchema(
    field_name="interventionRoles",
    label="Intervention Roles",
    task="identify the roles or benefits of AI intervention for the research subjects in the given paper.",
    cardinality=Cardinality.MULTI,
    output_description="The identified roles or benefits of AI intervention.",
    separator=",",
    categories=_cats(
        ("Knowledge scaffolding", "AI helps provide guidance, explanations, or structure to support learning."),
        ("Feedback & revision", "AI helps subjects receive feedback and improve or revise their work."),
        ("Production booster", "AI helps subjects produce work faster or more efficiently."),
        ("Metacognition/SRL", "AI supports self-reflection, self-regulation, or metacognitive strategies."),
        ("Policy", "AI is used to guide decisions, rules, or policies affecting subjects."),
        ("Others", "any other role not covered above."),
    ),
)

TEACHER_SUPPORT = ClassificationSchema(
    field_name="teacherSupport",
    label="Teacher Support",
    task="identify the types of teacher support provided or mentioned in the given paper.",
    cardinality=Cardinality.MULTI,
    output_description="The identified types of teacher support.",
    separator=",",
    categories=_cats(
        ("Explicit_Scaffolding", "Teachers are given clear guidance or structured support on how to integrate AI."),
        ("TPD_DigLit", "Teachers receive training or professional development in digital literacy or AI use."),
        ("Support_Centers", "Teachers have access to support centers, helpdesks, or additional resources."),
    ),
)

ROLES_SKILLS = ClassificationSchema(
    field_name="rolesSkills",
    label="Language Skills",
    task="identify the language skills targeted or supported by AI in the given paper.",
    cardinality=Cardinality.MULTI,
    output_description="The identified language skills targeted or supported by AI.",
    separator=",",
    categories=_cats(
        ("L", "Listening"),
        ("S", "Speaking"),
        ("R", "Reading"),
        ("W", "Writing"),
        ("T", "Translation"),
        ("Others", "any other skill not covered above."),
    ),
    rules=("Use the category codes, not the skill names.",),
)

AI_DISCLOSURE_REQUIRED = ClassificationSchema(
    field_name="aiDisclosureRequired",
    label="AI Disclosure Required",
    task="identify whether the paper requires AI disclosure.",
    cardinality=Cardinality.SINGLE,
    output_description="Identifies whether AI disclosure is required.",
    categories=_cats(
        ("Yes", "AI disclosure is required."),
        ("No", "AI disclosure is not required."),
    ),
)

AI_USE_INSTRUCTIONS_PROVIDED = ClassificationSchema(
    field_name="aiUseInstructionsProvided",
    label="AI Use Instructions Provided",
    task=(
        "identify whether the paper provides explicit instructions or training on AI use "
        "to the research subjects."
    ),
    cardinality=Cardinality.SINGLE,
    output_description="Identifies whether explicit instructions or training on AI use were provided.",
    categories=_cats(
        ("Yes", "Explicit instructions or training on AI use are provided."),
        ("No", "No explicit instructions or training are provided."),
    ),
)

DIMENSIONS: Tuple[ClassificationSchema, ...] = (
    SUBJECT_LEVEL,
    PARTICIPANTS_GROUP,
    DISCIPLINE,
    SUB_DISCIPLINE,
    COUNTRY_OR_REGION,
    SAMPLE_SIZE,
    DESIGN_TYPE,
    EVIDENCE_STRENGTH,
    EMI_CONTEXT,
    INTEGRATION_MODE,
    AI_TECH_TYPE,
    MEASURES,
    OUTCOME_CATEGORY,
    ETHICS_FOCUS,
    INTERVENTION_ROLES,
    TEACHER_SUPPORT,
    ROLES_SKILLS,
    AI_DISCLOSURE_REQUIRED,
    AI_USE_INSTRUCTIONS_PROVIDED,
)
