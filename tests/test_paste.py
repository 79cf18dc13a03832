"""Tests for the spreadsheet paste parser."""

from ccb_ops.models import Modality, OperationInput, OperationStatus
from ccb_ops.paste import LABEL_KEYWORDS, apply_pasted_fields, match_label, parse_pasted_text


class TestLabelPairs:
    """Tests for the two-column (label/value) interpretation."""

    def test_basic_pairs(self) -> None:
        text = "PA\t05\nNome\tMaria Silva\nCPF\t12345678901"

        assert parse_pasted_text(text) == {
            "pa": "05",
            "nome": "Maria Silva",
            "cpf_cnpj": "12345678901",
        }

    def test_all_labels(self) -> None:
        text = "\n".join(
            [
                "PA\t05",
                "Produto\tConsignado INSS",
                "Limite\t15.000,00",
                "Conta Corrente\t12345-6",
                "Nome\tJoão Souza",
                "CPF/CNPJ\t123.456.789-01",
                "Número CCB\t2024000123",
                "Modalidade\tConsignado",
                "Status\tEm Análise",
                "Pendência\tSim",
            ]
        )

        result = parse_pasted_text(text)

        assert result == {
            "pa": "05",
            "produto": "Consignado INSS",
            "limite": "15.000,00",
            "conta_corrente": "12345-6",
            "nome": "João Souza",
            "cpf_cnpj": "123.456.789-01",
            "numero_ccb": "2024000123",
            "modalidade": "Consignado",
            "status": "Em Análise",
            "pendencia": "Sim",
        }

    def test_values_and_labels_are_trimmed(self) -> None:
        result = parse_pasted_text("  NOME  \t  Maria  \r\nPA\t05\r")
        assert result == {"nome": "Maria", "pa": "05"}

    def test_last_line_wins(self) -> None:
        result = parse_pasted_text("Nome\tPrimeiro\nNome\tSegundo")
        assert result == {"nome": "Segundo"}

    def test_cpf_and_cnpj_label_maps_once(self) -> None:
        assert parse_pasted_text("cpf cnpj\t12345678000195") == {"cpf_cnpj": "12345678000195"}

    def test_first_keyword_wins(self) -> None:
        """'pa' is checked before everything else, even inside other words."""
        assert match_label("Pagamento") == "pa"
        assert match_label("Conta do Nome") == "conta_corrente"

    def test_unknown_labels_ignored(self) -> None:
        result = parse_pasted_text("Observação\tqualquer\nNome\tMaria")
        assert result == {"nome": "Maria"}

    def test_extra_columns_ignored(self) -> None:
        assert parse_pasted_text("Nome\tMaria\tignorado") == {"nome": "Maria"}

    def test_keyword_order_is_explicit(self) -> None:
        fields = [name for _, name in LABEL_KEYWORDS]
        assert fields[0] == "pa"
        assert fields.index("cpf_cnpj") < fields.index("numero_ccb")


class TestSingleRow:
    """Tests for the positional single-row fallback."""

    def test_seven_cells(self) -> None:
        text = "05\tConsignado\t1500000\t12345-6\tMaria Silva\t12345678901\t2024000123"

        assert parse_pasted_text(text) == {
            "pa": "05",
            "produto": "Consignado",
            "limite": "1500000",
            "conta_corrente": "12345-6",
            "nome": "Maria Silva",
            "cpf_cnpj": "12345678901",
            "numero_ccb": "2024000123",
        }

    def test_excess_cells_ignored(self) -> None:
        text = "05\tA\t100\t1\tMaria\t12345678901\t77\textra\tmore"
        result = parse_pasted_text(text)
        assert len(result) == 7
        assert result["numero_ccb"] == "77"

    def test_six_cells_not_recognized(self) -> None:
        assert parse_pasted_text("05\tA\t100\t1\tMaria\t12345678901") == {}

    def test_multiple_unlabeled_lines_not_recognized(self) -> None:
        line = "05\tA\t100\t1\tMaria\t12345678901\t77"
        assert parse_pasted_text(f"{line}\n{line}") == {}

    def test_trailing_newline_still_single_line(self) -> None:
        line = "05\tA\t100\t1\tMaria\t12345678901\t77"
        assert parse_pasted_text(f"{line}\n")["pa"] == "05"


class TestUnrecognized:
    """Tests for input the parser cannot read."""

    def test_empty(self) -> None:
        assert parse_pasted_text("") == {}
        assert parse_pasted_text("   \n  ") == {}

    def test_plain_text(self) -> None:
        assert parse_pasted_text("isto não é uma planilha") == {}


class TestApplyPastedFields:
    """Tests for merging parsed values into a form."""

    def test_normalizes_values(self) -> None:
        form = apply_pasted_fields(
            OperationInput(),
            {"limite": "R$ 1.500,00", "cpf_cnpj": "12345678000195", "nome": "Empresa X"},
        )

        assert form.limite == "1.500,00"
        assert form.cpf_cnpj == "12.345.678/0001-95"
        assert form.nome == "Empresa X"

    def test_empty_values_keep_current(self) -> None:
        current = OperationInput(pa="03", nome="Atual")
        form = apply_pasted_fields(current, {"pa": "", "nome": "Novo"})

        assert form.pa == "03"
        assert form.nome == "Novo"

    def test_pending_flag_coercion(self) -> None:
        assert apply_pasted_fields(OperationInput(), {"pendencia": "SIM"}).pendencia is True
        assert apply_pasted_fields(OperationInput(), {"pendencia": "não"}).pendencia is False

    def test_pending_flag_never_cleared(self) -> None:
        current = OperationInput(pendencia=True)
        assert apply_pasted_fields(current, {"pendencia": "não"}).pendencia is True

    def test_known_modality_and_status_applied(self) -> None:
        form = apply_pasted_fields(OperationInput(), {"modalidade": "Consignado", "status": "em_analise"})

        assert form.modalidade == Modality.CONSIGNADO
        assert form.status == OperationStatus.EM_ANALISE

    def test_unknown_modality_ignored(self) -> None:
        form = apply_pasted_fields(OperationInput(), {"modalidade": "leasing"})
        assert form.modalidade == Modality.CAPITAL_GIRO

    def test_input_form_untouched(self) -> None:
        current = OperationInput()
        apply_pasted_fields(current, {"nome": "Maria"})
        assert current.nome == ""

    def test_very_long_limit_formats(self) -> None:
        digits = "9" * 30
        form = apply_pasted_fields(OperationInput(), parse_pasted_text(f"Limite\t{digits}"))

        assert form.limite.endswith(",99")
        assert form.limite.replace(".", "").replace(",", "") == digits
