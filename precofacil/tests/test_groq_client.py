import json
from unittest.mock import MagicMock, patch

from precofacil.llm import groq_client
from precofacil.llm.config import LLMConfig

CONFIG = LLMConfig(api_key="test-key")


def _completion(payload):
    response = MagicMock()
    response.choices[0].message.content = payload if isinstance(payload, str) else json.dumps(payload)
    return response


STORE_PAYLOAD = {
    "storeName": "Mercado Bom Preço",
    "storeType": "Mercado",
    "socialMedia": {"instagram": "@bompreco", "website": "https://bompreco.example"},
    "prices": [
        {"productName": "Arroz 5kg", "price": 21.9, "source": "Instagram",
         "lastUpdated": "2024-05-01", "confidence": "high"},
        {"productName": "Feijão 1kg", "price": 7.5, "source": "Site",
         "lastUpdated": "2024-05-02", "confidence": "medium"},
        {"productName": "Café 500g", "price": 13.0, "source": "Facebook",
         "lastUpdated": "2024-04-01", "confidence": "low"},
        {"productName": "Sem preço", "price": -1, "confidence": "high"},
    ],
}


@patch("precofacil.llm.groq_client.Groq")
def test_fetch_real_prices_keeps_trusted_entries(mock_groq):
    client = mock_groq.return_value
    client.chat.completions.create.return_value = _completion(STORE_PAYLOAD)

    result = groq_client.fetch_real_prices("Mercado Bom Preço", "Mercado", "São Paulo", config=CONFIG)

    assert [p.product_name for p in result.prices] == ["Arroz 5kg", "Feijão 1kg"]
    assert result.social_media.instagram == "@bompreco"
    assert result.last_scraped
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["temperature"] == CONFIG.temperature
    assert "Mercado Bom Preço" in kwargs["messages"][1]["content"]
    mock_groq.assert_called_once_with(api_key="test-key", timeout=CONFIG.timeout)


@patch("precofacil.llm.groq_client.Groq")
def test_fetch_real_prices_bad_json_returns_none(mock_groq):
    mock_groq.return_value.chat.completions.create.return_value = _completion("not json {")
    assert groq_client.fetch_real_prices("Loja", "Loja", "Recife", config=CONFIG) is None


@patch("precofacil.llm.groq_client.Groq")
def test_fetch_real_prices_api_error_returns_none(mock_groq):
    mock_groq.return_value.chat.completions.create.side_effect = RuntimeError("rate limited")
    assert groq_client.fetch_real_prices("Loja", "Loja", "Recife", config=CONFIG) is None


@patch("precofacil.llm.groq_client.Groq")
def test_fetch_real_prices_without_key(mock_groq):
    assert groq_client.fetch_real_prices("Loja", "Loja", "Recife", config=LLMConfig(api_key="")) is None
    mock_groq.assert_not_called()


@patch("precofacil.llm.groq_client.Groq")
def test_search_specific_product_prices(mock_groq):
    mock_groq.return_value.chat.completions.create.return_value = _completion({
        "prices": [
            {"productName": "Leite 1L", "price": 4.99, "source": "Mercado A - site",
             "lastUpdated": "hoje", "confidence": "medium"},
            {"productName": "Leite 1L", "price": 3.0, "confidence": "low"},
        ],
    })

    prices = groq_client.search_specific_product_prices("Leite 1L", ["Mercado A", "Mercado B"], "Natal", config=CONFIG)

    assert len(prices) == 1
    assert prices[0].price == 4.99
    user_prompt = mock_groq.return_value.chat.completions.create.call_args.kwargs["messages"][1]["content"]
    assert "Mercado A, Mercado B" in user_prompt


@patch("precofacil.llm.groq_client.Groq")
def test_search_specific_product_prices_failure(mock_groq):
    mock_groq.return_value.chat.completions.create.side_effect = TimeoutError()
    assert groq_client.search_specific_product_prices("Leite", ["A"], "Natal", config=CONFIG) == []
