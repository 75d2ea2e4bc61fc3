import enum
import logging
import math
from typing import List, NamedTuple, Sequence, Tuple

from car_genome import (
    CAR_SENSORS_NUM,
    ENGINE_FORMULA_GENES_NUM,
    EXPONENT_BIAS,
    EXPONENT_GENE_INDEX,
    FRACTION_GENE_INDEX,
    GENES_PER_NUMBER,
    GENOME_LENGTH,
    SIGN_GENE_INDEX,
    WHEELS_FORMULA_GENES_NUM,
    Bits,
    Genome,
    GenomeError,
    check_genes,
)

logger = logging.getLogger(__name__)

# 死区宽度，取值 [0, 1]；默认阈值为 0.25 / 0.75
MARGIN = 0.5

FormulaCoefficients = List[float]
SensorValues = Sequence[float]


class GeneBlockError(GenomeError):
    """基因块长度不是 GENES_PER_NUMBER 的整数倍"""


class GenomeLengthError(GenomeError):
    """基因组总长度不等于 GENOME_LENGTH"""


class FormulaError(ValueError):
    """系数数量与传感器数量不匹配"""


class FormulaResult(enum.IntEnum):
    NEGATIVE = -1
    NEUTRAL = 0
    POSITIVE = 1

    # 引擎：后退 / 空挡 / 前进
    BACKWARD = -1
    FORWARD = 1
    # 车轮：左 / 直行 / 右
    LEFT = -1
    STRAIGHT = 0
    RIGHT = 1


class DecodedGenome(NamedTuple):
    engine_coefficients: FormulaCoefficients
    wheels_coefficients: FormulaCoefficients


def bits_to_int(bits: Bits) -> int:
    """二进制位（高位在前）转无符号整数，如 [1, 0, 1, 0] -> 10"""
    return sum(
        int(bit) << (len(bits) - i - 1)
        for i, bit in enumerate(bits)
    )


def decode_number(genes: Bits) -> float:
    """将 8 位自定义格式（符号 | 偏置指数 | 小数，十进制缩放）转为 float"""
    genes = list(genes)
    if len(genes) != GENES_PER_NUMBER:
        raise GeneBlockError("Wrong number of genes in the number genome")
    check_genes(genes)

    sign = -1 if genes[SIGN_GENE_INDEX] else 1
    exponent = bits_to_int(genes[EXPONENT_GENE_INDEX:FRACTION_GENE_INDEX]) - EXPONENT_BIAS
    fraction = bits_to_int(genes[FRACTION_GENE_INDEX:])

    return float(sign * fraction * (10 ** exponent))


def decode_numbers(genes: Bits) -> List[float]:
    genes = list(genes)
    if len(genes) % GENES_PER_NUMBER != 0:
        raise GeneBlockError("Wrong number of genes in the numbers genome")
    return [
        decode_number(genes[start:start + GENES_PER_NUMBER])
        for start in range(0, len(genes), GENES_PER_NUMBER)
    ]


def decode_genome(genome: Bits) -> DecodedGenome:
    """
    解码基因组为两组公式系数

    前 ENGINE_FORMULA_GENES_NUM 个基因为引擎公式，随后同样长度为车轮公式。
    """
    genes = list(genome)
    if len(genes) != GENOME_LENGTH:
        raise GenomeLengthError(
            f"Genome length should be {GENOME_LENGTH}, got {len(genes)}"
        )

    engine_genes = genes[:ENGINE_FORMULA_GENES_NUM]
    wheels_genes = genes[
        ENGINE_FORMULA_GENES_NUM:ENGINE_FORMULA_GENES_NUM + WHEELS_FORMULA_GENES_NUM
    ]

    decoded = DecodedGenome(
        engine_coefficients=decode_numbers(engine_genes),
        wheels_coefficients=decode_numbers(wheels_genes),
    )
    logger.debug("decoded genome: engine=%s wheels=%s",
                 decoded.engine_coefficients, decoded.wheels_coefficients)
    return decoded


def linear_polynomial(coefficients: Sequence[float], variables: SensorValues) -> float:
    """计算线性多项式：y = w0*x0 + w1*x1 + ... + b"""
    if len(coefficients) != len(variables) + 1:
        raise FormulaError(
            "Incompatible number of polynomial coefficients and variables: "
            f"{len(coefficients)} coefficients for {len(variables)} variables"
        )
    return sum(w * x for w, x in zip(coefficients[:-1], variables)) + coefficients[-1]


def sigmoid(x: float) -> float:
    """安全 Sigmoid 函数，防止溢出"""
    if x < -709:
        return 0.0
    elif x > 709:
        return 1.0
    else:
        return 1.0 / (1.0 + math.exp(-x))


def _check_margin(margin: float) -> None:
    if not 0 <= margin <= 1:
        raise ValueError(f"margin must be within [0, 1], got {margin}")


def sigmoid_to_categorical(sigmoid_value: float, margin: float = MARGIN) -> FormulaResult:
    """将 Sigmoid 输出映射为 -1, 0, +1，0.5 附近宽度为 margin 的区间为 0"""
    _check_margin(margin)
    if sigmoid_value > 0.5 + margin / 2:
        return FormulaResult.POSITIVE
    if sigmoid_value < 0.5 - margin / 2:
        return FormulaResult.NEGATIVE
    return FormulaResult.NEUTRAL


def evaluate(coefficients: Sequence[float], sensors: SensorValues,
             margin: float = MARGIN) -> FormulaResult:
    raw = linear_polynomial(coefficients, sensors)
    if math.isnan(raw):
        raise FormulaError("Formula result is NaN, check sensor values")
    result = sigmoid_to_categorical(sigmoid(raw), margin)
    logger.debug("formula raw=%s -> %s", raw, result.name)
    return result


def engine_formula(genome: Bits, sensors: SensorValues,
                   margin: float = MARGIN) -> FormulaResult:
    """引擎信号：-1 后退，0 空挡，+1 前进"""
    return evaluate(decode_genome(genome).engine_coefficients, sensors, margin)


def wheels_formula(genome: Bits, sensors: SensorValues,
                   margin: float = MARGIN) -> FormulaResult:
    """车轮信号：-1 左转，0 直行，+1 右转"""
    return evaluate(decode_genome(genome).wheels_coefficients, sensors, margin)


class GenomeDecoder:
    """
    基因组解码器：将二进制基因序列解码为控制信号（转向、油门）

    每个数字 8 位（1位符号 + 3位指数 + 4位小数），按 10 的幂缩放。
    """

    def __init__(self, margin: float = MARGIN):
        _check_margin(margin)
        self.margin = margin

    def decode(self, genome: Bits, sensors: SensorValues) -> Tuple[FormulaResult, FormulaResult]:
        """
        解码基因组，生成控制信号

        Args:
            genome: 二进制基因序列，长度必须为 GENOME_LENGTH
            sensors: CAR_SENSORS_NUM 个传感器读数

        Returns:
            (wheels_signal, engine_signal) -> 每个信号 ∈ {-1, 0, +1}
        """
        if len(sensors) != CAR_SENSORS_NUM:
            raise FormulaError(
                f"Expected {CAR_SENSORS_NUM} sensor values, got {len(sensors)}"
            )

        decoded = decode_genome(genome)
        wheels_signal = evaluate(decoded.wheels_coefficients, sensors, self.margin)
        engine_signal = evaluate(decoded.engine_coefficients, sensors, self.margin)
        return wheels_signal, engine_signal


# ==================== 使用示例 ====================
if __name__ == "__main__":
    decoder = GenomeDecoder()

    # 模拟 16 个传感器值（单位：米），0 表示未检测到障碍物
    sensor_values = [1.2, 0.8, 3.5, 0.0, 2.1, 4.0, 0.3, 1.9,
                     0.0, 0.0, 2.6, 1.1, 0.5, 0.0, 3.3, 0.7]

    # 交替的 0/1 基因组，仅用于演示
    demo_genome = Genome(i % 2 for i in range(GENOME_LENGTH))

    coefficients = decode_genome(demo_genome)
    print("引擎系数:", coefficients.engine_coefficients)
    print("车轮系数:", coefficients.wheels_coefficients)

    wheels, engine = decoder.decode(demo_genome, sensor_values)
    print(f"控制信号 -> 转向: {wheels.name}, 油门: {engine.name}")
