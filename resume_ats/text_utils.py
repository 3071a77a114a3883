"""
Shared text utilities for acronym casing and markup cleanup.
"""

import re
from typing import Dict, List, Tuple


# Terms that should always keep a canonical casing
ACRONYM_MAP: Dict[str, str] = {
    # AI/ML
    'llm': 'LLM', 'llms': 'LLMs',
    'nlp': 'NLP',
    'ml': 'ML', 'ai': 'AI', 'rag': 'RAG',
    'cnn': 'CNN', 'rnn': 'RNN', 'lstm': 'LSTM', 'gpt': 'GPT',
    'gan': 'GAN', 'gans': 'GANs',
    'bert': 'BERT', 'transformer': 'Transformer', 'transformers': 'Transformers',

    # Databases
    'sql': 'SQL', 'nosql': 'NoSQL', 'mysql': 'MySQL',
    'postgresql': 'PostgreSQL', 'mssql': 'MSSQL',
    'mongodb': 'MongoDB', 'dynamodb': 'DynamoDB',
    'jdbc': 'JDBC', 'odbc': 'ODBC',

    # API/Web
    'api': 'API', 'apis': 'APIs', 'rest': 'REST', 'restful': 'RESTful',
    'graphql': 'GraphQL', 'grpc': 'gRPC',
    'html': 'HTML', 'css': 'CSS', 'json': 'JSON', 'xml': 'XML', 'yaml': 'YAML',
    'http': 'HTTP', 'https': 'HTTPS', 'ssh': 'SSH', 'ssl': 'SSL', 'tls': 'TLS',
    'oauth': 'OAuth', 'jwt': 'JWT',
    'sdk': 'SDK', 'ide': 'IDE', 'orm': 'ORM',

    # Cloud
    'aws': 'AWS', 'gcp': 'GCP', 'azure': 'Azure',
    'saas': 'SaaS', 'paas': 'PaaS', 'iaas': 'IaaS',
    'ec2': 'EC2', 's3': 'S3', 'rds': 'RDS', 'ecs': 'ECS', 'eks': 'EKS',

    # DevOps/Infrastructure
    'etl': 'ETL', 'elt': 'ELT',
    'ci/cd': 'CI/CD', 'cicd': 'CI/CD',
    'k8s': 'K8s', 'kubernetes': 'Kubernetes',
    'docker': 'Docker', 'terraform': 'Terraform',
    'dag': 'DAG', 'dags': 'DAGs',
    'sla': 'SLA', 'slas': 'SLAs',

    # Hardware
    'gpu': 'GPU', 'gpus': 'GPUs', 'cpu': 'CPU', 'cpus': 'CPUs',
    'tpu': 'TPU', 'tpus': 'TPUs',

    # Business metrics
    'kpi': 'KPI', 'kpis': 'KPIs', 'roi': 'ROI',
    'bi': 'BI',

    # Frameworks/Tools
    'nodejs': 'Node.js', 'node.js': 'Node.js',
    'reactjs': 'React.js', 'react.js': 'React.js', 'react': 'React',
    'vuejs': 'Vue.js', 'vue.js': 'Vue.js', 'vue': 'Vue',
    'nextjs': 'Next.js', 'next.js': 'Next.js',
    'fastapi': 'FastAPI',
    'pytorch': 'PyTorch', 'tensorflow': 'TensorFlow',
    'apache': 'Apache', 'kafka': 'Kafka', 'spark': 'Spark',
    'airflow': 'Airflow', 'hadoop': 'Hadoop',
    'elasticsearch': 'Elasticsearch', 'redis': 'Redis',
    'snowflake': 'Snowflake', 'databricks': 'Databricks',
    'tableau': 'Tableau', 'powerbi': 'Power BI', 'power bi': 'Power BI',
    'looker': 'Looker',

    # Programming languages
    'python': 'Python', 'java': 'Java', 'javascript': 'JavaScript',
    'typescript': 'TypeScript', 'golang': 'Golang', 'scala': 'Scala',
    'kotlin': 'Kotlin', 'swift': 'Swift', 'rust': 'Rust',

    # Methodologies
    'agile': 'Agile', 'scrum': 'Scrum', 'kanban': 'Kanban',
    'devops': 'DevOps', 'mlops': 'MLOps', 'dataops': 'DataOps',

    # Compliance
    'hipaa': 'HIPAA', 'gdpr': 'GDPR', 'soc2': 'SOC2', 'soc 2': 'SOC 2',
    'pci': 'PCI', 'sox': 'SOX',
}

_ACRONYM_PATTERNS: List[Tuple[re.Pattern, str]] = [
    (re.compile(r'\b' + re.escape(term) + r'\b', re.IGNORECASE), proper)
    for term, proper in ACRONYM_MAP.items()
]

_HTML_TAG = re.compile(r'<[^>]*>')
DASH_CHARS = ('—', '–')  # em dash, en dash


def normalize_acronyms(text: str) -> str:
    """Replace known terms with their canonical casing (whole words only)."""
    if not text:
        return ""

    result = text
    for pattern, proper in _ACRONYM_PATTERNS:
        result = pattern.sub(proper, result)
    return result


def capitalize_with_acronyms(text: str) -> str:
    """Upper-case the first character, then fix acronym casing."""
    if not text:
        return ""
    return normalize_acronyms(text[0].upper() + text[1:])


def clean_text(text: str) -> str:
    """Replace em/en dashes with hyphens and normalize acronyms."""
    if not text:
        return ""

    for dash in DASH_CHARS:
        text = text.replace(dash, '-')
    return normalize_acronyms(text)


def strip_html_tags(text: str) -> str:
    """Strip inline markup such as <strong> from text."""
    return _HTML_TAG.sub('', text or "")


def has_dashes(text: str) -> bool:
    return any(dash in text for dash in DASH_CHARS)
