"""Application constants.

Field limits for aluno records, the email pattern, and the PT-BR messages
returned in response envelopes.
"""

import re

# ---------------------------------------------------------------------------
# Field limits
# ---------------------------------------------------------------------------
NOME_MAX_LENGTH: int = 100
CURSO_MAX_LENGTH: int = 100
IDADE_MIN: int = 1
IDADE_MAX: int = 150

# local@domain.tld, no whitespace and a single "@"
EMAIL_PATTERN: re.Pattern[str] = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

# ---------------------------------------------------------------------------
# PostgREST / PostgreSQL error codes
# ---------------------------------------------------------------------------
PG_UNIQUE_VIOLATION: str = "23505"
PG_INVALID_TEXT_REPRESENTATION: str = "22P02"
PGRST_NO_ROWS: str = "PGRST116"

# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
CORS_ALLOW_HEADERS: str = "authorization, x-client-info, apikey, content-type"
CORS_ALLOW_METHODS: str = "GET, POST, PUT, PATCH, DELETE, OPTIONS"

# ---------------------------------------------------------------------------
# Validation messages
# ---------------------------------------------------------------------------
MSG_NOME_OBRIGATORIO = "Nome é obrigatório e deve ser um texto válido"
MSG_NOME_TAMANHO = f"Nome deve ter no máximo {NOME_MAX_LENGTH} caracteres"
MSG_IDADE_OBRIGATORIA = "Idade é obrigatória e deve ser um número"
MSG_IDADE_FAIXA = f"Idade deve estar entre {IDADE_MIN} e {IDADE_MAX} anos"
MSG_EMAIL_OBRIGATORIO = "Email é obrigatório"
MSG_EMAIL_INVALIDO = "Email deve ser válido"
MSG_CURSO_OBRIGATORIO = "Curso é obrigatório e deve ser um texto válido"
MSG_CURSO_TAMANHO = f"Curso deve ter no máximo {CURSO_MAX_LENGTH} caracteres"

# ---------------------------------------------------------------------------
# Envelope messages
# ---------------------------------------------------------------------------
MSG_LISTADOS = "Alunos listados com sucesso"
MSG_ENCONTRADO = "Aluno encontrado com sucesso"
MSG_CADASTRADO = "Aluno cadastrado com sucesso"
MSG_ATUALIZADO = "Aluno atualizado com sucesso"
MSG_DELETADO = "Aluno deletado com sucesso"

MSG_ID_OBRIGATORIO = "ID do aluno é obrigatório"
MSG_DADOS_INVALIDOS = "Dados inválidos"
MSG_NAO_ENCONTRADO = "Aluno não encontrado"
MSG_NAO_ENCONTRADO_DETALHE = "Nenhum aluno encontrado com o ID {aluno_id}"
MSG_INSERCAO_SEM_RETORNO = "A inserção não retornou nenhum registro"
MSG_EMAIL_DUPLICADO = "Email já cadastrado"
MSG_EMAIL_DUPLICADO_DETALHE = "Este email já está sendo usado por outro aluno"

MSG_ERRO_LISTAR = "Erro ao listar alunos"
MSG_ERRO_BUSCAR = "Erro ao buscar aluno"
MSG_ERRO_CADASTRAR = "Erro ao cadastrar aluno"
MSG_ERRO_ATUALIZAR = "Erro ao atualizar aluno"
MSG_ERRO_DELETAR = "Erro ao deletar aluno"

MSG_METODO_NAO_PERMITIDO = "Método não permitido"
MSG_ERRO_INTERNO = "Erro interno do servidor"
