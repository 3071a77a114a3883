"""
Keyword extractor for job descriptions.
Extracts the job title, company, keywords and required skills from free-form
job posting text using pattern tables and noise filters.
"""

import logging
import re
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List, Optional

from . import config

logger = logging.getLogger(__name__)


# Skill pattern families, matched against lower-cased posting text.
# New verticals are new rows.
KEYWORD_PATTERNS: Dict[str, str] = {
    'languages': r'\b(python|java|javascript|typescript|c\+\+|c#|go|golang|rust|scala|kotlin|ruby|php|swift|r\b|matlab|perl|shell|bash|powershell)(?:\s*3)?',
    'web_cloud': r'\b(react|angular|vue\.?js|next\.?js|node\.?js|express|django|flask|spring|aws|azure|gcp|docker|kubernetes|sql|mysql|postgresql|mongodb|redis|graphql|rest\s*api|microservices|serverless|terraform|ci/cd|jenkins|git)(?:\.?js)?',
    'ml_frameworks': r'\b(tensorflow|pytorch|keras|scikit[\s-]?learn|xgboost|lightgbm|catboost|jax|hugging\s*face|transformers|spacy|nltk|opencv|pandas|numpy|scipy|matplotlib|seaborn|plotly|mlflow|wandb|weights\s*&?\s*biases|dvc|ray|dask|rapids|onnx|triton)(?:\s*\d)?',
    'ml_concepts': r'\b(machine\s*learning|deep\s*learning|reinforcement\s*learning|supervised\s*learning|unsupervised\s*learning|transfer\s*learning|few[\s-]?shot\s*learning|federated\s*learning|neural\s*network|convolutional\s*neural|recurrent\s*neural|generative\s*adversarial|attention\s*mechanism|feature\s*engineering|feature\s*store|hyperparameter\s*tuning|model\s*evaluation|cross[\s-]?validation|gradient\s*descent|backpropagation|regularization|dimensionality\s*reduction|ensemble\s*methods?|random\s*forest|decision\s*tree|support\s*vector|logistic\s*regression|linear\s*regression|clustering|classification|regression|anomaly\s*detection|time\s*series|forecasting)',
    'genai': r'\b(llm|large\s*language\s*model|generative\s*ai|gen\s*ai|gpt|chatgpt|claude|gemini|llama|mistral|prompt\s*engineering|fine[\s-]?tuning|rlhf|lora|qlora|peft|rag|retrieval[\s-]?augmented|langchain|llamaindex|vector\s*database|vector\s*store|pinecone|weaviate|chromadb|milvus|faiss|embedding|tokenization|attention|transformer|chain[\s-]?of[\s-]?thought|agent|multi[\s-]?modal|diffusion\s*model|stable\s*diffusion)',
    'nlp': r'\b(natural\s*language\s*processing|nlp|text\s*mining|text\s*classification|sentiment\s*analysis|named\s*entity\s*recognition|ner|pos\s*tagging|dependency\s*parsing|word\s*embeddings?|word2vec|glove|bert|roberta|gpt[\s-]?\d|t5|seq2seq|language\s*model|text\s*generation|text\s*summarization|machine\s*translation|question\s*answering|information\s*extraction|information\s*retrieval|topic\s*modeling|lda|speech\s*recognition|asr|tts|text[\s-]?to[\s-]?speech)',
    'computer_vision': r'\b(computer\s*vision|image\s*recognition|object\s*detection|image\s*segmentation|semantic\s*segmentation|instance\s*segmentation|image\s*classification|face\s*recognition|facial\s*recognition|pose\s*estimation|optical\s*character|ocr|yolo|resnet|vgg|efficientnet|unet|gan|style\s*transfer|image\s*generation|video\s*analysis|3d\s*vision|point\s*cloud|lidar|depth\s*estimation)',
    'mlops': r'\b(mlops|model\s*deployment|model\s*serving|model\s*monitoring|model\s*registry|feature\s*store|ml\s*pipeline|data\s*pipeline|sagemaker|vertex\s*ai|azure\s*ml|databricks|kubeflow|airflow|prefect|dagster|bentoml|seldon|kserve|torchserve|tensorflow\s*serving|model\s*drift|a/b\s*testing|canary\s*deployment|model\s*versioning|experiment\s*tracking|ci/cd\s*for\s*ml)',
    'data_engineering': r'\b(etl|data\s*pipeline|spark|kafka|flink|airflow|tableau|power\s*bi|looker|analytics|business\s*intelligence|data\s*warehouse|snowflake|bigquery|redshift|databricks|delta\s*lake|data\s*lake|data\s*mesh|data\s*governance|data\s*quality|data\s*catalog|dbt|fivetran|data\s*modeling|star\s*schema|data\s*ingestion|batch\s*processing|stream\s*processing|real[\s-]?time\s*data)',
    'healthcare_regulatory': r'\b(fda|ema|ich|gxp|gmp|gcp|glp|regulatory\s*affairs|clinical\s*trials?|ind|nda|bla|anda|510\(k\)|pma|cmc|ctd|ectd|regulatory\s*submissions?|drug\s*safety|pharmacovigilance|adverse\s*events?|medical\s*devices?|biologics?|pharmaceuticals?|qms|quality\s*management|capa|deviation|validation|qualification|sop|standard\s*operating|audit|inspection|labeling|post[\s-]?market|pre[\s-]?market|clinical\s*development|clinical\s*operations|medical\s*writing|regulatory\s*strategy|health\s*authorities?|dossier|module\s*[1-5])',
    'finance': r'\b(gaap|ifrs|sox|sarbanes[\s-]?oxley|financial\s*reporting|audit|budgeting|forecasting|p&l|profit\s*and\s*loss|balance\s*sheet|cash\s*flow|accounts\s*payable|accounts\s*receivable|general\s*ledger|month[\s-]?end\s*close|reconciliation|variance\s*analysis|financial\s*modeling|m&a|due\s*diligence|valuation|erp|sap|oracle\s*financials|netsuite|quickbooks|cpa|cfa|tax\s*compliance|treasury|working\s*capital|revenue\s*recognition)',
    'legal_compliance': r'\b(contract\s*management|contract\s*review|litigation|intellectual\s*property|patents?|trademarks?|corporate\s*governance|compliance\s*program|risk\s*management|due\s*diligence|kyc|aml|anti[\s-]?money\s*laundering|sanctions|regulatory\s*compliance|data\s*privacy|gdpr|ccpa|hipaa|legal\s*research|legal\s*writing|paralegal|corporate\s*law|employment\s*law)',
    'marketing_sales': r'\b(digital\s*marketing|seo|sem|ppc|google\s*ads|facebook\s*ads|social\s*media|content\s*marketing|email\s*marketing|marketing\s*automation|hubspot|salesforce|crm|lead\s*generation|conversion\s*rate|roi|brand\s*management|market\s*research|competitive\s*analysis|go[\s-]?to[\s-]?market|product\s*launch|pricing\s*strategy|sales\s*enablement|account\s*management|business\s*development|partnership)',
    'hr_operations': r'\b(talent\s*acquisition|recruiting|onboarding|performance\s*management|compensation|benefits|hris|workday|successfactors|employee\s*relations|organizational\s*development|learning\s*&?\s*development|workforce\s*planning|diversity|inclusion|change\s*management|process\s*improvement|six\s*sigma|lean|kaizen|supply\s*chain|procurement|logistics|inventory\s*management|vendor\s*management|project\s*management|pmp|agile|scrum|waterfall)',
    'engineering_manufacturing': r'\b(mechanical\s*engineering|electrical\s*engineering|civil\s*engineering|chemical\s*engineering|process\s*engineering|manufacturing|cad|solidworks|autocad|catia|plc|scada|automation|robotics|quality\s*control|quality\s*assurance|iso\s*\d+|lean\s*manufacturing|production\s*planning|capacity\s*planning|maintenance|reliability|safety|osha|environmental)',
    'business': r'\b(strategic\s*planning|business\s*strategy|stakeholder\s*management|cross[\s-]?functional|executive\s*presentations?|board\s*presentations?|budget\s*management|team\s*leadership|people\s*management|mentoring|coaching|negotiation|problem[\s-]?solving|decision[\s-]?making|communication|presentation|microsoft\s*office|excel|powerpoint|word|outlook)',
    'soft_skills': r'\b(leadership|collaboration|teamwork|team\s*player|interpersonal\s*skills?|relationship\s*building|conflict\s*resolution|emotional\s*intelligence|adaptability|flexibility|resilience|critical\s*thinking|analytical\s*thinking|creative\s*thinking|innovation|creativity|attention\s*to\s*detail|detail[\s-]?oriented|organized|organizational\s*skills?|time\s*management|prioritization|multitasking|self[\s-]?motivated|self[\s-]?starter|proactive|initiative|accountability|ownership|integrity|professionalism|customer[\s-]?focused|client[\s-]?focused|results[\s-]?driven|goal[\s-]?oriented|fast[\s-]?paced|deadline[\s-]?driven|work\s*independently|independent\s*work|verbal\s*communication|written\s*communication|active\s*listening|empathy|patience|persuasion|influence|diplomacy|cultural\s*awareness|diversity\s*&?\s*inclusion)',
}

COMPILED_PATTERNS: Dict[str, re.Pattern] = {
    category: re.compile(pattern) for category, pattern in KEYWORD_PATTERNS.items()
}

TITLE_PATTERNS = [
    re.compile(r'(?:position|role|title|job):[ \t]*([^\n]+)', re.IGNORECASE),
    re.compile(r'\b(?:hiring|seeking|looking\s+for)\s+(?:an?\s+)?([^\n,]+)', re.IGNORECASE),
    re.compile(
        r'^([A-Z][A-Za-z \t]+(?:Engineer|Developer|Manager|Analyst|Architect|Lead|Director|'
        r'Specialist|Scientist|Designer|Officer|Coordinator|Associate|Consultant))',
        re.MULTILINE,
    ),
    re.compile(r'^#*[ \t]*([A-Z][A-Za-z \t/]+)$', re.MULTILINE),
]

COMPANY_PATTERNS = [
    re.compile(r'\b(?:company|organization|at|join):[ \t]*([^\n,]+)', re.IGNORECASE),
    re.compile(r'^([A-Z][a-zA-Z \t&.]+?)(?:[ \t]+is\b|,|[ \t]+[–—-][ \t])', re.MULTILINE),
    re.compile(r'\b(?i:about|at|join)[ \t]+([A-Z][a-zA-Z&.]*(?:[ \t]+[A-Z][a-zA-Z&.]*)*)'),
]

SENTENCE_END = re.compile(r'[.!?;:](?:\s|$)')

ACRONYM_PATTERN = re.compile(r'\b[A-Z]{2,}(?:\s+[A-Z]{2,})*\b')
REQUIREMENT_ACRONYM = re.compile(r'\b[A-Z]{2,}\b')
ACRONYM_STOPWORDS = frozenset({
    'the', 'and', 'for', 'with', 'our', 'you', 'will', 'this', 'that', 'have', 'your', 'are',
})

REQUIREMENT_SECTION_PATTERNS = [
    re.compile(
        r"(?:requirements?|qualifications?|must\s*have|required|what\s*you['’]?ll?\s*need|"
        r"what\s*we['’]?re\s*looking\s*for|you\s*have|key\s*responsibilities|essential)[:\s]*"
        r"[\s\S]*?(?=\n[ \t]*\n|nice\s*to\s*have|preferred|bonus|benefits|about\s*us|what\s*we\s*offer|\Z)",
        re.IGNORECASE,
    ),
    re.compile(
        r"(?:you\s*will|you['’]ll|the\s*ideal\s*candidate|experience\s*with|knowledge\s*of|"
        r"proficiency\s*in)[:\s]*[\s\S]*?(?=\n[ \t]*\n|\Z)",
        re.IGNORECASE,
    ),
]
BULLET_ITEM = re.compile(r'[•\-*]\s*([^\n•\-*]+)')
NUMBERED_ITEM = re.compile(r'\d+[.)]\s*([^\n]+)')
YEARS_CLAUSE = re.compile(
    r'^\d+\s*\+?\s*(?:years?|yrs?)\b(?:\s+of)?'
    r'(?:\s+(?:professional|relevant|industry|hands[\s-]on|proven|related))?'
    r'(?:\s+(?:experience|exp)\b)?'
    r'(?:\s+(?:with|in|using|on|of))?[\s:,]*',
    re.IGNORECASE,
)
DEGREE_ITEM = re.compile(r'^(?:bachelor|master|degree|education|bs\s|ms\s|phd)', re.IGNORECASE)
MIN_REQUIREMENT_ITEM_LENGTH = 6

VALID_SHORT_ACRONYMS = frozenset({
    'sql', 'aws', 'gcp', 'etl', 'api', 'ml', 'ai', 'nlp', 'rag', 'ci',
    'cd', 'css', 'php', 'seo', 'sem', 'ppc', 'crm', 'erp', 'sap', 'rpa',
    'fda', 'ema', 'ich', 'gxp', 'gmp', 'glp', 'cmc', 'ctd', 'pma',
    'nda', 'bla', 'ind', 'sop', 'cad', 'plc', 'sox', 'cpa', 'cfa', 'pmp',
    'kyc', 'aml', 'roi', 'eoe', 'tga', 'mdr', 'usd', 'iso',
    # ML/AI
    'cnn', 'rnn', 'gan', 'vgg', 'dnn', 'gpt', 'llm', 'ner', 'asr', 'tts',
    'ocr', 'lda', 'dvc', 'jax', 'dbt', 'sre',
})

# Sentence-fragment words: a keyword containing any of these is not a skill
FILLER_WORDS = frozenset({
    'what', 'how', 'why', 'when', 'where', 'who', 'which',
    'you', 'your', 'our', 'their', 'my', 'we', 'us',
    'the', 'this', 'that', 'these', 'those',
    'will', 'can', 'may', 'should', 'would', 'could', 'must',
    'expect', 'offer', 'provide', 'looking', 'seeking', 'hiring',
    'company', 'corporation', 'inc', 'llc', 'corp',
    'background', 'qualifications', 'requirements', 'responsibilities',
    'bachelor', 'master', 'degree', 'education', 'university', 'college',
})

GENERIC_BLACKLIST = frozenset({
    # HR/business buzzwords
    'qualification', 'compensation', 'benefits', 'salary',
    'recruiting', 'recruitment', 'onboarding', 'retention',
    'logistics', 'operations', 'duties', 'tasks',
    'environment', 'culture', 'values', 'mission', 'vision',
    'opportunity', 'opportunities', 'growth', 'career', 'position',
    'team', 'teams', 'department', 'organization', 'workplace',
    'performance', 'reviews', 'feedback', 'goals', 'objectives',
    'travel', 'remote', 'hybrid', 'onsite', 'location',
    'candidate', 'applicant', 'employee', 'employer', 'staff',
    # Bare soft skills
    'innovation', 'creativity', 'leadership', 'collaboration',
    'teamwork', 'communication', 'presentation', 'negotiation',
    'mentoring', 'coaching', 'flexibility', 'adaptability',
    'resilience', 'integrity', 'professionalism', 'accountability',
    'ownership', 'initiative', 'proactive', 'organized',
    'prioritization', 'multitasking', 'patience', 'empathy',
    'persuasion', 'influence', 'diplomacy',
    # Office tools
    'excel', 'word', 'powerpoint', 'outlook',
    # Generic terms
    'manufacturing', 'automation', 'safety', 'maintenance',
    'reliability', 'environmental', 'diversity', 'inclusion',
    'procurement',
})

JOB_TITLE_WORDS = re.compile(
    r'\b(specialist|manager|director|coordinator|analyst|engineer|lead|officer|'
    r'associate|consultant|administrator)\b'
)
ALLOWED_TITLE_COMPOUNDS = frozenset({
    'project management', 'change management', 'risk management', 'data management',
})
SENIORITY_PREFIX = re.compile(r'^(sr|jr|junior|senior|mid|entry)\s')
LEADING_STOPWORD = re.compile(r'^(the|a|an|at|in|on|for|to|of|and|or)\s')
WORD_SPLIT = re.compile(r'[^a-z0-9]+')


@dataclass
class JobDescription:
    """Structured job posting."""
    text: str = ""
    job_title: str = config.DEFAULT_JOB_TITLE
    company_name: str = config.DEFAULT_COMPANY_NAME
    extracted_keywords: List[str] = field(default_factory=list)
    required_skills: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict) -> "JobDescription":
        """Rebuild a job description that was extracted earlier."""
        return cls(
            text=data.get("text") or "",
            job_title=data.get("job_title") or data.get("jobTitle") or config.DEFAULT_JOB_TITLE,
            company_name=data.get("company_name") or data.get("companyName") or config.DEFAULT_COMPANY_NAME,
            extracted_keywords=[
                k.lower() for k in (data.get("extracted_keywords") or data.get("extractedKeywords") or []) if k
            ],
            required_skills=[
                k.lower() for k in (data.get("required_skills") or data.get("requiredSkills") or []) if k
            ],
        )

    def to_dict(self) -> Dict:
        return asdict(self)

    def all_keywords(self) -> List[str]:
        """Extracted keywords followed by required skills, lower-cased, deduplicated."""
        return _dedupe(k.lower() for k in self.extracted_keywords + self.required_skills)


def _dedupe(items: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def _normalize(term: str) -> str:
    return re.sub(r'\s+', ' ', term.strip().lower())


def match_patterns(text: str, categories: Optional[Iterable[str]] = None) -> List[str]:
    """Run the skill pattern table over text, returning normalized matches in order.

    Only matches longer than two characters are kept.
    """
    lowered = text.lower()
    names = list(categories) if categories is not None else list(COMPILED_PATTERNS)
    found: List[str] = []
    for name in names:
        for match in COMPILED_PATTERNS[name].finditer(lowered):
            term = _normalize(match.group(0))
            if len(term) > 2 and term not in found:
                found.append(term)
    return found


def is_valid_keyword(keyword: str) -> bool:
    """Reject sentence fragments, buzzwords, job titles and short noise."""
    lower = keyword.lower().strip()

    if not lower or len(lower) > config.MAX_KEYWORD_LENGTH:
        return False

    if len(lower) < 4 and ' ' not in lower and lower not in VALID_SHORT_ACRONYMS:
        return False

    if any(word in FILLER_WORDS for word in WORD_SPLIT.split(lower)):
        return False

    if lower in GENERIC_BLACKLIST:
        return False

    if JOB_TITLE_WORDS.search(lower) and lower not in ALLOWED_TITLE_COMPOUNDS:
        return False

    if SENIORITY_PREFIX.match(lower) or LEADING_STOPWORD.match(lower):
        return False

    return len(lower.split()) <= config.MAX_KEYWORD_WORDS


class JobDescriptionExtractor:
    """Extract a structured job description from posting text."""

    def extract(self, text: Optional[str]) -> JobDescription:
        """Extract title, company, keywords and required skills. Never raises."""
        original = text or ""

        keywords = match_patterns(original)
        for term in self._extract_acronyms(original):
            if term not in keywords:
                keywords.append(term)

        required = self._extract_required_skills(original)

        unique_keywords = [k for k in _dedupe(required + keywords) if is_valid_keyword(k)]
        required_skills = [k for k in required if is_valid_keyword(k)]

        job = JobDescription(
            text=original,
            job_title=self._extract_title(original),
            company_name=self._extract_company(original),
            extracted_keywords=unique_keywords[:config.MAX_EXTRACTED_KEYWORDS],
            required_skills=required_skills[:config.MAX_REQUIRED_SKILLS],
        )
        logger.debug(
            "Extracted %d keywords and %d required skills for '%s' at '%s'",
            len(job.extracted_keywords), len(job.required_skills), job.job_title, job.company_name,
        )
        return job

    def _extract_title(self, text: str) -> str:
        for index, pattern in enumerate(TITLE_PATTERNS):
            match = pattern.search(text)
            if not match:
                continue
            title = match.group(1)
            if index == 1:
                # "Seeking a Data Engineer. Requirements: ..." -> "Data Engineer"
                title = SENTENCE_END.split(title, maxsplit=1)[0]
            title = re.sub(r'[^\w\s]', '', title)
            title = re.sub(r'\s+', ' ', title).strip()
            if title:
                return title
        return config.DEFAULT_JOB_TITLE

    def _extract_company(self, text: str) -> str:
        for pattern in COMPANY_PATTERNS:
            match = pattern.search(text)
            if not match:
                continue
            company = re.sub(r'\s+', ' ', match.group(1)).strip().rstrip('.').strip()
            if company:
                return company
        return config.DEFAULT_COMPANY_NAME

    def _extract_acronyms(self, text: str) -> List[str]:
        acronyms = []
        for match in ACRONYM_PATTERN.finditer(text):
            term = _normalize(match.group(0))
            if 2 <= len(term) <= config.MAX_ACRONYM_LENGTH and term not in ACRONYM_STOPWORDS:
                acronyms.append(term)
        return acronyms

    def _extract_required_skills(self, text: str) -> List[str]:
        """Pull skills from requirements/qualifications sections."""
        required: List[str] = []

        for section_pattern in REQUIREMENT_SECTION_PATTERNS:
            for section in section_pattern.finditer(text):
                for item in self._split_items(section.group(0)):
                    for term in self._item_skills(item):
                        if term not in required:
                            required.append(term)

        return required

    def _split_items(self, section: str) -> List[str]:
        items = BULLET_ITEM.findall(section) or NUMBERED_ITEM.findall(section)
        return [item.strip() for item in items]

    def _item_skills(self, item: str) -> List[str]:
        if len(item) < MIN_REQUIREMENT_ITEM_LENGTH or DEGREE_ITEM.match(item):
            return []

        # "5+ years Python" keeps "Python"; "5+ years of experience" is dropped
        if YEARS_CLAUSE.match(item):
            item = YEARS_CLAUSE.sub('', item, count=1).strip()
            if len(item) < 3:
                return []

        terms = match_patterns(item)
        for acronym in REQUIREMENT_ACRONYM.findall(item):
            term = acronym.lower()
            if term not in terms:
                terms.append(term)
        return terms


def extract_job_description(text: Optional[str]) -> JobDescription:
    """Convenience function to extract a job description from posting text."""
    extractor = JobDescriptionExtractor()
    return extractor.extract(text)
