from typing import Iterable, List, Literal, Sequence, Union

# 类型别名
Gene = Literal[0, 1]
Bits = List[Gene]

# 配置常量
CAR_SENSORS_NUM = 16  # 16 个距离传感器
BIAS_UNITS = 1

# 精度配置（1位符号 + 3位指数 + 4位小数 = 8位）
PRECISION_CONFIG = {
    "signBitsCount": 1,
    "exponentBitsCount": 3,
    "fractionBitsCount": 4,
}
PRECISION_CONFIG["totalBitsCount"] = (
    PRECISION_CONFIG["signBitsCount"]
    + PRECISION_CONFIG["exponentBitsCount"]
    + PRECISION_CONFIG["fractionBitsCount"]
)

GENES_PER_NUMBER = PRECISION_CONFIG["totalBitsCount"]

# 0 123 4567 - 基因下标
# X XXX XXXX - 8 位数字：符号 | 指数（带偏置）| 小数
SIGN_GENE_INDEX = 0
EXPONENT_GENE_INDEX = SIGN_GENE_INDEX + PRECISION_CONFIG["signBitsCount"]
FRACTION_GENE_INDEX = EXPONENT_GENE_INDEX + PRECISION_CONFIG["exponentBitsCount"]
# 偏置 = 2^(k-1) - 1，k 为指数位数
EXPONENT_BIAS = (1 << (PRECISION_CONFIG["exponentBitsCount"] - 1)) - 1

COEFFICIENTS_LENGTH = CAR_SENSORS_NUM + BIAS_UNITS

# 两个公式：引擎（后退/空挡/前进）与车轮（左/直行/右）
ENGINE_FORMULA_GENES_NUM = COEFFICIENTS_LENGTH * GENES_PER_NUMBER
WHEELS_FORMULA_GENES_NUM = COEFFICIENTS_LENGTH * GENES_PER_NUMBER

GENOME_LENGTH = ENGINE_FORMULA_GENES_NUM + WHEELS_FORMULA_GENES_NUM


class GenomeError(ValueError):
    """基因组内容或长度不合法"""


def check_genes(genes: Sequence) -> None:
    """每个基因必须是 0 或 1（int/bool），字符串与小数一律拒绝"""
    for gene in genes:
        if isinstance(gene, str) or gene not in (0, 1):
            raise GenomeError(f"All genes must be 0 or 1, got {gene!r}")


class Genome:
    """不可变的二进制基因组"""

    __slots__ = ("_genes",)

    def __init__(self, genes: Iterable[Union[int, bool]]):
        genes = tuple(genes)
        check_genes(genes)
        self._genes = tuple(int(g) for g in genes)

    @classmethod
    def from_string(cls, text: str) -> "Genome":
        """由 "0101..." 形式的字符串构造，忽略空白与下划线"""
        cleaned = "".join(ch for ch in text if not ch.isspace() and ch != "_")
        if not all(ch in "01" for ch in cleaned):
            raise GenomeError(f"Invalid genome string: {text!r}")
        return cls(int(ch) for ch in cleaned)

    @property
    def genes(self) -> Sequence[int]:
        return self._genes

    def __repr__(self):
        return f"Genome(len={len(self._genes)})"

    def __str__(self):
        return "".join(str(g) for g in self._genes)

    def __len__(self):
        return len(self._genes)

    def __iter__(self):
        return iter(self._genes)

    def __getitem__(self, index):
        return self._genes[index]

    def __eq__(self, other):
        if isinstance(other, Genome):
            return self._genes == other._genes
        return NotImplemented

    def __hash__(self):
        return hash(self._genes)
