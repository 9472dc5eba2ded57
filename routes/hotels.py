from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user

from services.hotel_query_service import HotelQueryService
from services.hotel_lifecycle_service import HotelLifecycleService
from services.hotel_statistics_service import HotelStatisticsService
from utils.http import request_payload, page_url_builder


hotels_bp = Blueprint('hotels', __name__, url_prefix='/api')

query_service = HotelQueryService()
lifecycle_service = HotelLifecycleService()
statistics_service = HotelStatisticsService()


@hotels_bp.route('/hotels', methods=['GET'])
@login_required
def index():
    page = query_service.list_hotels(current_user.id, request.args, page_url_builder())
    return jsonify({
        'success': True,
        'data': [hotel.to_dict() for hotel in page.items],
        'pagination': page.pagination,
        'filters': page.filters,
        'meta': page.meta,
    })


@hotels_bp.route('/hotels', methods=['POST'])
@login_required
def store():
    hotel = lifecycle_service.create_hotel(current_user.id, request_payload(), request.files.get('photo'))
    return jsonify({
        'success': True,
        'message': 'Hotel created successfully',
        'data': hotel.to_dict(),
    }), 201


@hotels_bp.route('/hotels/<int:hotel_id>', methods=['GET'])
@login_required
def show(hotel_id):
    hotel = lifecycle_service.get_hotel(current_user.id, hotel_id)
    return jsonify({'success': True, 'data': hotel.to_dict()})


@hotels_bp.route('/hotels/<int:hotel_id>', methods=['PUT', 'PATCH'])
@login_required
def update(hotel_id):
    hotel = lifecycle_service.update_hotel(current_user.id, hotel_id, request_payload(), request.files.get('photo'))
    return jsonify({
        'success': True,
        'message': 'Hotel updated successfully',
        'data': hotel.to_dict(),
    })


@hotels_bp.route('/hotels/<int:hotel_id>/update-photo', methods=['POST'])
@login_required
def update_photo(hotel_id):
    hotel = lifecycle_service.update_photo(current_user.id, hotel_id, request.files.get('photo'))
    return jsonify({
        'success': True,
        'message': 'Photo updated successfully',
        'photo': hotel.photo,
    })


@hotels_bp.route('/hotels/<int:hotel_id>', methods=['DELETE'])
@login_required
def destroy(hotel_id):
    lifecycle_service.soft_delete(current_user.id, hotel_id)
    return jsonify({'success': True, 'message': 'Hotel deleted successfully'})


@hotels_bp.route('/hotels/<int:hotel_id>/restore', methods=['PATCH'])
@login_required
def restore(hotel_id):
    lifecycle_service.restore(current_user.id, hotel_id)
    return jsonify({'success': True, 'message': 'Hotel restored successfully'})


@hotels_bp.route('/hotels/statistics', methods=['GET'])
@login_required
def statistics():
    return jsonify({'success': True, 'data': statistics_service.statistics(current_user.id)})


@hotels_bp.route('/hotels/statistics/charts', methods=['GET'])
@login_required
def statistics_charts():
    return jsonify({'success': True, 'data': statistics_service.statistics_by_month(current_user.id)})


@hotels_bp.route('/hotels/filter-options', methods=['GET'])
@login_required
def filter_options():
    return jsonify({'success': True, 'data': query_service.filter_options()})


@hotels_bp.route('/enums', methods=['GET'])
@login_required
def enums():
    return jsonify({'success': True, 'data': query_service.enums()})
