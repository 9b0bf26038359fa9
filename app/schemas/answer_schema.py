from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

MAX_ANSWER_LENGTH = 1000


class AnswerSchema(BaseModel):
    """Schema para validar una respuesta de texto libre dentro de un flujo"""
    value: str = Field(...)

    @field_validator('value')
    def validate_value(cls, v):
        v = v.strip()
        if not v:
            raise PydanticCustomError(
                'answer_empty',
                'Por favor escribe una respuesta para continuar.'
            )
        if len(v) > MAX_ANSWER_LENGTH:
            raise PydanticCustomError(
                'answer_too_long',
                'Tu respuesta es muy larga. Resúmela en menos de {max_length} caracteres, por favor.',
                {'max_length': MAX_ANSWER_LENGTH}
            )
        return v


class OptionSchema(BaseModel):
    """Schema para validar la elección de una opción numerada 1..max_option"""
    option: int
    max_option: int

    @field_validator('option', mode='before')
    def validate_option(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if not v.isdigit():
                raise PydanticCustomError(
                    'option_invalid',
                    'Escribe solo el número de la opción.'
                )
        return int(v)

    @field_validator('max_option')
    def validate_range(cls, v, info):
        option = info.data.get('option')
        if option is not None and not 1 <= option <= v:
            raise PydanticCustomError(
                'option_out_of_range',
                'Número inválido. Elige una opción entre 1 y {max_option}.',
                {'max_option': v}
            )
        return v
