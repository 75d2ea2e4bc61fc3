import logging
import math
from typing import NamedTuple

logger = logging.getLogger(__name__)

# 发生碰撞时适应度乘以该系数
COLLISION_PENALTY = 0.01


class SpatialPoint(NamedTuple):
    x: float
    y: float
    z: float


class RectanglePoints(NamedTuple):
    """矩形四角：左前、右前、右后、左后"""
    fl: SpatialPoint
    fr: SpatialPoint
    br: SpatialPoint
    bl: SpatialPoint


def distance(from_point: SpatialPoint, to_point: SpatialPoint) -> float:
    """XZ 平面上的欧氏距离，忽略竖直方向 Y"""
    from_x, _, from_z = from_point
    to_x, _, to_z = to_point
    return math.hypot(from_x - to_x, from_z - to_z)


def loss(wheels_position: RectanglePoints, parking_lot_corners: RectanglePoints) -> float:
    """计算车轮与目标车位对应角点的平均距离，0 表示完全重合"""
    wheels = RectanglePoints(*wheels_position)
    corners = RectanglePoints(*parking_lot_corners)
    distances = [distance(w, c) for w, c in zip(wheels, corners)]
    result = sum(distances) / 4.0
    logger.debug("loss: corner distances=%s mean=%s", distances, result)
    return result


def fitness_from_loss(car_loss: float, has_collision: bool = False) -> float:
    """
    将 loss 转为适应度（越大越好）
    - loss 越小（离车位越近），适应度越高
    - 碰撞时适应度乘以 COLLISION_PENALTY
    """
    if car_loss < 0:
        raise ValueError(f"loss must be non-negative, got {car_loss}")
    fitness = 1.0 / (car_loss + 1e-6)
    if has_collision:
        fitness *= COLLISION_PENALTY
    return fitness


# ==================== 使用示例 ====================

TARGET_PARKING_SPOT = RectanglePoints(
    fl=SpatialPoint(2, 0, 0),
    fr=SpatialPoint(2, 0, 4),
    br=SpatialPoint(0, 0, 4),
    bl=SpatialPoint(0, 0, 0),
)

if __name__ == "__main__":
    # 车辆整体偏移 (3, 0, 4)，每个角点距离均为 5
    wheels = RectanglePoints(*(SpatialPoint(p.x + 3, p.y, p.z + 4) for p in TARGET_PARKING_SPOT))
    car_loss = loss(wheels, TARGET_PARKING_SPOT)
    print(f"loss: {car_loss:.2f}, fitness: {fitness_from_loss(car_loss):.4f}")
